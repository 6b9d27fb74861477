"""Parsing of JSON/YAML text into nodes."""

from .node_parser import NodeParser, node_parser

__all__ = ['NodeParser', 'node_parser']
