"""``$ref`` keyword for already available schema documents."""

from __future__ import annotations

from .base import AbstractKeyword, AbstractValidator


class RefValidator(AbstractValidator):
    def __init__(self, schema_path, formatter, ref: str, target):
        super().__init__("$ref", schema_path, formatter)
        self.ref = ref
        self.target = target

    def validate(self, node, root, at):
        return self.target.validate(node, root, at)


class RefKeyword(AbstractKeyword):
    fragment_schema = {"type": "string"}

    def __init__(self):
        super().__init__("$ref")

    def new_validator(self, schema_path, schema_node, parent_schema_node, context):
        ref = schema_node.as_text()
        return RefValidator(schema_path, context.formatter, ref, context.resolve_reference(ref))
