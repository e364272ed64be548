from rest_framework.exceptions import ValidationError


def require_identifiers(**identifiers):
    """Raise ValidationError naming every identifier that is missing or blank."""
    missing = [
        name for name, value in identifiers.items()
        if value is None or not str(value).strip()
    ]
    if missing:
        raise ValidationError({name: ["This field is required."] for name in missing})
