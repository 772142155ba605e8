# This file is part of Modulerp.  The COPYRIGHT file at the top level of
# this repository contains the full copyright notices and license terms.
import configparser
import importlib
import importlib.util
import logging
import os
import sys

from modulerp.config import config
from modulerp.exceptions import MissingDependenciesException

__all__ = ['get_module_info', 'get_module_list', 'create_graph',
    'load_modules']

logger = logging.getLogger(__name__)

OPJ = os.path.join
MODULES_PATH = os.path.abspath(os.path.dirname(__file__))


def get_modules_path():
    "Return the directories where the modules are searched"
    paths = [MODULES_PATH]
    for path in (config.get('modules', 'path', default='') or '').split(
            os.pathsep):
        path = path.strip()
        if path:
            paths.append(os.path.abspath(os.path.expanduser(path)))
    return paths


def get_module_directory(name):
    for path in get_modules_path():
        directory = OPJ(path, name)
        if os.path.isfile(OPJ(directory, 'module.cfg')):
            return directory
    raise MissingDependenciesException([name])


def import_module(name):
    fullname = 'modulerp.modules.' + name
    if fullname in sys.modules:
        return sys.modules[fullname]
    directory = get_module_directory(name)
    if os.path.dirname(directory) == MODULES_PATH:
        return importlib.import_module(fullname)
    spec = importlib.util.spec_from_file_location(
        fullname, OPJ(directory, '__init__.py'),
        submodule_search_locations=[directory])
    module = importlib.util.module_from_spec(spec)
    sys.modules[fullname] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[fullname]
        raise
    return module


def get_module_info(name):
    "Return the content of the module.cfg"
    directory = get_module_directory(name)
    module_config = configparser.ConfigParser()
    with open(OPJ(directory, 'module.cfg')) as fp:
        module_config.read_file(fp)
    info = dict(module_config.items('modulerp'))
    info['directory'] = directory
    info['depends'] = info.get('depends', '').strip().split()
    return info


def get_module_list():
    module_list = set()
    for path in get_modules_path():
        if not os.path.isdir(path):
            continue
        for file in os.listdir(path):
            if os.path.isfile(OPJ(path, file, 'module.cfg')):
                module_list.add(file)
    return sorted(module_list)


class Graph(dict):
    def get(self, name):
        if name in self:
            node = self[name]
        else:
            node = self[name] = Node(name)
        return node

    def add(self, name, deps):
        node = self.get(name)
        for dep in deps:
            self.get(dep).append(node)
        return node

    def __iter__(self):
        for node in sorted(self.values(), key=lambda n: (n.depth, n.name)):
            yield node


class Node(list):
    def __init__(self, name):
        super(Node, self).__init__()
        self.name = name
        self.info = None
        self.__depth = 0

    def __repr__(self):
        return str((self.name, self.depth, tuple(self)))

    @property
    def depth(self):
        return self.__depth

    @depth.setter
    def depth(self, value):
        if value > self.__depth:
            self.__depth = value
            for child in self:
                child.depth = value + 1

    def append(self, node):
        assert isinstance(node, Node)
        node.depth = self.depth + 1
        super(Node, self).append(node)


def create_graph(module_list):
    '''
    Return the graph of module_list and of their dependencies, a node comes
    after all the modules it depends on.
    '''
    available = set(get_module_list())
    todo = list(module_list)
    graph = Graph()
    missing = set()
    while todo:
        module = todo.pop()
        if module in graph and graph[module].info is not None:
            continue
        if module not in available:
            missing.add(module)
            continue
        info = get_module_info(module)
        node = graph.add(module, info['depends'])
        node.info = info
        todo.extend(info['depends'])
    if missing:
        raise MissingDependenciesException(sorted(missing))
    return graph


def load_modules(pool, module_list=None):
    '''
    Import the modules and their dependencies in order and call their
    register function with pool. Return the names of the loaded modules.
    '''
    if module_list is None:
        module_list = get_module_list()
    loaded = []
    for node in create_graph(module_list):
        module = node.name
        logger.info('%s:registering classes', module)
        the_module = import_module(module)
        # Some modules register nothing in the Pool
        if hasattr(the_module, 'register'):
            the_module.register(pool)
        loaded.append(module)
    return loaded
