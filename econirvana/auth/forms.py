"""Signup form checks, run before the account store is touched."""

from econirvana.auth.models import SignupForm

MIN_PASSWORD_LENGTH = 6


def validate_password(password: str) -> str | None:
    """Return an error message if *password* is too weak, else None."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    return None


def validate_signup_form(form: SignupForm) -> str | None:
    """Return the first problem with *form*, or None when it can be submitted."""
    if not (form.name and form.email and form.password and form.confirm_password):
        return "Please fill in all fields"

    password_error = validate_password(form.password)
    if password_error:
        return password_error

    if form.password != form.confirm_password:
        return "Passwords do not match"

    if not form.agree_terms:
        return "You must agree to the terms and conditions"

    return None
