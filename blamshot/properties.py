import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class ContainerState(Enum):
    '''Enum to state the actual phase of a container'''
    UNINITIALIZED = 0
    OPEN          = auto()
    CLOSED        = auto()


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.BlobField(Dependency('.length'))

    and have the (internal) length of the blob contained in the field named 'data'
    strictly connected to the field named 'length': reading the length of 'data'
    gives the value of 'length', setting 'data' writes back its length into 'length'.

    The syntax of the expression is inspired by module resolution:

     - '.' as first char indicates we refer to a field at the same level
     - otherwise the path starts from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self._cache = None  # used when the field has no father

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        logger.debug('trying to resolve \'%s\'' % self.expression)

        fields_path = self.expression.split('.')
        # '.size'.split(".") -> ['', 'size']
        # 'size'.split(".") -> ['size']
        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        for component_name in fields_path:
            field = getattr(field, component_name)

        logger.debug(' resolved as field %s' % field.__class__.__name__)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        if instance.father is None:
            return self._cache

        return self.resolve_field(instance).value

    def resolve_and_set(self, instance, value):
        if instance.father is None:
            self._cache = value
            return

        real_field = self.resolve_field(instance)
        if not hasattr(real_field, 'value'):
            raise ValueError('something is wrong with the Dependency resolution!')
        real_field.value = value


class Offset(object):
    '''Offset immediately following a sibling field, i.e. Offset('.data')
    resolves to the end of the field named "data".'''

    def __init__(self, expression):
        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve(self, instance):
        sibling = getattr(instance.father, self.expression.lstrip('.'))

        return sibling.offset + sibling.size


class PropertyDescriptor(object):
    """This the glue for dependency management"""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    def __get__(self, instance, owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            return value.resolve(instance)

        return value

    def __set__(self, instance, value):
        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        data = instance.__dict__
        attribute = data.get(self.name)

        # an existing dependency is never replaced by a plain value:
        # the value is written back where the dependency points
        if isinstance(attribute, Dependency) and not isinstance(value, Dependency):
            attribute.resolve_and_set(instance, value)
            return

        data[self.name] = value
