"""Validation shared by everything configured with a query string parameter name."""


def validate_parameter_name(parameter_name: str) -> str:
    """Return ``parameter_name`` unchanged if it can name a query string parameter.

    Raises:
        TypeError: If the name is None or not a string
        ValueError: If the name is empty or whitespace
    """
    if parameter_name is None:
        raise TypeError("parameter_name cannot be None")
    if not isinstance(parameter_name, str):
        raise TypeError(f"parameter_name must be a string, got {type(parameter_name).__name__}")
    if not parameter_name.strip():
        raise ValueError("The 'parameter_name' cannot be null or whitespace.")
    return parameter_name
