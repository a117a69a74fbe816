from .validator import try_validate, validate, validate_params, validate_response

__all__ = ["try_validate", "validate", "validate_params", "validate_response"]
