"""Data models for the account flow."""

from pydantic import BaseModel


class User(BaseModel):
    """The signed-in user, as persisted in local storage."""

    id: str
    name: str
    email: str


class SignupForm(BaseModel):
    """Fields submitted by the signup page."""

    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    agree_terms: bool = False


class Credentials(BaseModel):
    """Fields submitted by the login page."""

    email: str = ""
    password: str = ""
