# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
from modulerp.exceptions import UserError


class ValidationError(UserError):
    pass


class RequiredValidationError(ValidationError):
    pass


class SelectionValidationError(ValidationError):
    pass


class DomainValidationError(ValidationError):
    pass


__all__ = [
    DomainValidationError,
    RequiredValidationError,
    SelectionValidationError,
    ValidationError,
    ]
