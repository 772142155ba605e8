# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import functools
import inspect
import logging
from collections import OrderedDict, defaultdict
from contextvars import ContextVar
from threading import RLock

from modulerp.exceptions import ModelNotFoundError, RegistrationError

__all__ = ['Pool', 'PoolMeta', 'PoolBase', 'Extension', 'call_previous']

logger = logging.getLogger(__name__)

_previous = ContextVar('previous', default=None)


def call_previous(*args, **kwargs):
    '''
    Call the implementation replaced by the running Extension method.

    The binding exists only during the dynamic extent of the overriding call
    and is local to the calling context, so concurrent tasks never see each
    other's previous implementation.
    '''
    previous = _previous.get()
    if previous is None:
        raise RuntimeError('No previous implementation to call')
    return previous(*args, **kwargs)


class PoolMeta(type):

    def __new__(cls, name, bases, dct):
        new = type.__new__(cls, name, bases, dct)
        if '__name__' in dct:
            new.__name__ = dct['__name__']
        return new


class PoolBase(object, metaclass=PoolMeta):
    @classmethod
    def __setup__(cls):
        pass

    @classmethod
    def __post_setup__(cls):
        pass


def _declared_name(cls):
    name = cls.__dict__.get('__name__')
    if not isinstance(name, str) or not name:
        raise RegistrationError(
            '%s must declare a non-empty __name__' % cls.__qualname__)
    return name


def _chain(owner, name, method, overrides):
    "Wrap method so that call_previous reaches what it overrides on owner"
    kind = None
    if isinstance(method, (classmethod, staticmethod)):
        kind = type(method)
        method = method.__func__

    def previous(args):
        if not overrides:
            return None
        if kind is staticmethod:
            return getattr(super(owner[0], owner[0]), name)
        return getattr(super(owner[0], args[0]), name)

    if inspect.iscoroutinefunction(method):
        @functools.wraps(method)
        async def wrapper(*args, **kwargs):
            token = _previous.set(previous(args))
            try:
                return await method(*args, **kwargs)
            finally:
                _previous.reset(token)
    else:
        @functools.wraps(method)
        def wrapper(*args, **kwargs):
            token = _previous.set(previous(args))
            try:
                return method(*args, **kwargs)
            finally:
                _previous.reset(token)
    if kind is not None:
        wrapper = kind(wrapper)
    return wrapper


class Extension(object):
    '''
    A partial modification of the model named target.

    fields is a mapping of field name to Field which is merged over the
    fields of the model, a field with the same name is replaced in full.
    methods is a mapping of name to function (or classmethod and
    staticmethod). A function replacing an existing method can reach it with
    call_previous() during its execution.
    '''

    def __init__(self, target, fields=None, methods=None):
        if not target or not isinstance(target, str):
            raise RegistrationError('Extension must have a target model')
        self.target = target
        self.fields = dict(fields or {})
        self.methods = dict(methods or {})

    def __repr__(self):
        return '%s(%r, fields=%r, methods=%r)' % (
            self.__class__.__name__, self.target,
            sorted(self.fields), sorted(self.methods))

    def apply(self, cls):
        "Return a new class which is cls modified by the extension"
        owner = []
        dct = dict(self.fields)
        for name, method in self.methods.items():
            overrides = callable(getattr(cls, name, None))
            dct[name] = _chain(owner, name, method, overrides)
        new = type(cls.__name__, (cls,), dct)
        owner.append(new)
        return new


class Pool(object):
    '''
    Registry of the models contributed by the addons.

    Models are declared with define() and modified with extend() during the
    start-up of the process; compile() folds the extensions of a model onto
    its base definition and caches the result until the model is touched
    again by define() or extend().
    '''

    def __init__(self, name=''):
        self.name = name
        self._lock = RLock()
        self._models = OrderedDict()
        self._modules = {}
        self._extensions = defaultdict(list)
        self._compiled = {}

    def __repr__(self):
        return '<Pool %r with %s models>' % (self.name, len(self._models))

    def _invalidate(self, name):
        if self._compiled.pop(name, None) is not None:
            logger.debug('invalidate compiled model "%s"', name)

    def define(self, cls, module=None, replace=False):
        '''
        Register cls as the base definition of the model named by its
        __name__. Set replace to substitute an existing definition.
        '''
        from modulerp.model import Model
        if not isinstance(cls, PoolMeta) or not issubclass(cls, Model):
            raise RegistrationError('%r is not a model' % (cls,))
        name = _declared_name(cls)
        with self._lock:
            current = self._models.get(name)
            if current is not None and current is not cls and not replace:
                raise RegistrationError(
                    'Model "%s" already defined by %s' % (
                        name, self._modules.get(name) or current.__qualname__))
            self._models[name] = cls
            self._modules[name] = module
            self._invalidate(name)
        logger.info('define model "%s"%s', name,
            ' from %s' % module if module else '')
        return self

    def extend(self, extension, module=None):
        '''
        Register an extension of a model. It is either an Extension or a
        class with PoolMeta as metaclass and __name__ set to the target.
        '''
        from modulerp.model import Model
        if isinstance(extension, Extension):
            target = extension.target
        elif isinstance(extension, PoolMeta):
            if issubclass(extension, Model):
                raise RegistrationError(
                    '%s is a model, use define to register it'
                    % extension.__qualname__)
            target = _declared_name(extension)
        else:
            raise RegistrationError('%r is not an extension' % (extension,))
        with self._lock:
            self._extensions[target].append(extension)
            self._invalidate(target)
        logger.debug('extend model "%s" with %r%s', target, extension,
            ' from %s' % module if module else '')
        return self

    def register(self, *classes, **kwargs):
        '''
        Register a list of models and extensions for the module
        '''
        from modulerp.model import Model
        module = kwargs.pop('module', None)
        assert not kwargs, kwargs
        for cls in classes:
            if isinstance(cls, PoolMeta) and issubclass(cls, Model):
                self.define(cls, module=module)
            else:
                self.extend(cls, module=module)
        return self

    def compile(self, name):
        '''
        Return the model name with all its extensions applied
        '''
        cls = self._compiled.get(name)
        if cls is not None:
            return cls
        with self._lock:
            cls = self._compiled.get(name)
            if cls is not None:
                return cls
            try:
                base = self._models[name]
            except KeyError:
                raise ModelNotFoundError(name) from None
            extensions = list(self._extensions.get(name, []))
            cls = type(name, (base,), {})
            for extension in extensions:
                if isinstance(extension, Extension):
                    cls = extension.apply(cls)
                else:
                    cls = type(name, (extension, cls), {})
            cls._pool = self
            cls.__setup__()
            cls.__post_setup__()
            self._compiled[name] = cls
        logger.info('compile model "%s" with %s extension(s)',
            name, len(extensions))
        return cls

    def get(self, name):
        "Return the compiled model name"
        return self.compile(name)

    def has(self, name):
        return name in self._models

    def names(self):
        return list(self._models.keys())

    def extensions(self, name):
        "Return the registered extensions of the model name in order"
        return tuple(self._extensions.get(name, ()))
