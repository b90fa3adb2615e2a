from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor
from domaingen.schema.introspect import describe_model, describe_module
from domaingen.schema.loader import dump_schema, load_schema, load_source

__all__ = [
    "FieldDescriptor",
    "TypeDescriptor",
    "describe_model",
    "describe_module",
    "dump_schema",
    "load_schema",
    "load_source",
]
