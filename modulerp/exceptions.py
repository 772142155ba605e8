# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.


class ModulerpException(Exception):
    pass


class RegistrationError(ModulerpException):
    "Raised when the model registry is fed an inconsistent declaration."

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ModelNotFoundError(RegistrationError, KeyError):

    def __init__(self, name):
        super().__init__('Model "%s" not found' % name)
        self.name = name


class UserError(ModulerpException):

    def __init__(self, message, description='', domain=None):
        super().__init__('UserError', (message, description, domain))
        self.message = message
        self.description = description
        self.domain = domain
        self.code = 1

    def __str__(self):
        if self.description:
            return '%s - %s' % (self.message, self.description)
        return self.message


class MissingDependenciesException(ModulerpException):

    def __init__(self, missings):
        self.missings = missings

    def __str__(self):
        return 'Missing dependencies: %s' % ' '.join(self.missings)
