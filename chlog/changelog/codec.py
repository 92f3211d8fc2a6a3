"""YAML codec for changelog documents.

Decoding walks PyYAML's node tree instead of constructed Python objects, so
key order and duplicate keys stay observable and every scalar keeps its raw
text (``1.0`` stays the string "1.0", ``2024-01-15`` is never a date object).
Encoding builds a node tree and serializes it with every scalar tagged as a
string, which makes the emitter quote anything a YAML parser would read back
as another type.
"""

from __future__ import annotations

from collections.abc import Iterator

import yaml
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from ..errors import DecodeError
from ..models import Changelog, Changes, Version

STR_TAG = "tag:yaml.org,2002:str"
MAP_TAG = "tag:yaml.org,2002:map"
SEQ_TAG = "tag:yaml.org,2002:seq"
NULL_TAG = "tag:yaml.org,2002:null"

# Keys of a version mapping that are not public categories
RESERVED_VERSION_KEYS = ("date", "internal")


def loads(text: str) -> Changelog:
    """Decode YAML text into a Changelog (no validation)."""
    try:
        node = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise DecodeError(f"decoding YAML: {exc}") from exc
    if node is None:
        raise DecodeError("decoding YAML: empty document")
    return document_to_model(node)


def dumps(changelog: Changelog) -> str:
    """Encode a Changelog as YAML text."""
    return _serialize(model_to_document(changelog))


def dump_version(version: Version) -> str:
    """Encode a single version as a one-key ``<identifier>: {...}`` mapping."""
    return _serialize(MappingNode(MAP_TAG, [(_str(version.version), _version_node(version))]))


def document_to_model(node: Node) -> Changelog:
    """Convert a composed YAML node tree into a Changelog."""
    if not isinstance(node, MappingNode):
        raise DecodeError(f"expected mapping at document root, got {_kind(node)}")

    changelog = Changelog(project="")
    for key, value in _pairs(node, "document"):
        if key == "project":
            changelog.project = _scalar(value, "project")
        elif key == "versions":
            changelog.versions = _decode_versions(value)
        else:
            raise DecodeError(f'unknown field "{key}"')
    return changelog


def model_to_document(changelog: Changelog) -> MappingNode:
    """Convert a Changelog into a YAML node tree, preserving all ordering."""
    versions = MappingNode(
        MAP_TAG,
        [(_str(v.version), _version_node(v)) for v in changelog.versions],
    )
    return MappingNode(
        MAP_TAG,
        [
            (_str("project"), _str(changelog.project)),
            (_str("versions"), versions),
        ],
    )


# --- decoding ---------------------------------------------------------------


def _decode_versions(node: Node) -> list[Version]:
    if not isinstance(node, MappingNode):
        raise DecodeError(f"versions: expected mapping, got {_kind(node)}")
    return [_decode_version(identifier, value) for identifier, value in _pairs(node, "versions")]


def _decode_version(identifier: str, node: Node) -> Version:
    version = Version(version=identifier)
    path = f"versions.{identifier}"
    if _is_null(node):
        return version
    if not isinstance(node, MappingNode):
        raise DecodeError(f"{path}: expected mapping, got {_kind(node)}")

    for key, value in _pairs(node, path):
        if key == "date":
            version.date = _scalar(value, f"{path}.date")
        elif key == "internal":
            version.internal = _decode_changes(value, f"{path}.internal")
        else:
            _decode_category(version.public, key, value, f"{path}.{key}")
    return version


def _decode_changes(node: Node, path: str) -> Changes:
    changes = Changes()
    if _is_null(node):
        return changes
    if not isinstance(node, MappingNode):
        raise DecodeError(f"{path}: expected mapping, got {_kind(node)}")
    for key, value in _pairs(node, path):
        _decode_category(changes, key, value, f"{path}.{key}")
    return changes


def _decode_category(changes: Changes, name: str, node: Node, path: str) -> None:
    if _is_null(node):
        return
    if not isinstance(node, SequenceNode):
        raise DecodeError(f"{path}: expected list of strings, got {_kind(node)}")
    for i, item in enumerate(node.value):
        changes.append(name, _scalar(item, f"{path}[{i}]"))


def _pairs(node: MappingNode, path: str) -> Iterator[tuple[str, Node]]:
    """Yield (key, value node) in document order, rejecting duplicate keys."""
    seen: set[str] = set()
    for key_node, value_node in node.value:
        key = _scalar(key_node, f"{path} key")
        if key in seen:
            raise DecodeError(f'{path}: duplicate key "{key}"')
        seen.add(key)
        yield key, value_node


def _scalar(node: Node, path: str) -> str:
    if not isinstance(node, ScalarNode):
        raise DecodeError(f"{path}: expected string, got {_kind(node)}")
    if node.tag == NULL_TAG:
        return ""
    return node.value


def _is_null(node: Node) -> bool:
    return isinstance(node, ScalarNode) and node.tag == NULL_TAG


def _kind(node: Node) -> str:
    if isinstance(node, MappingNode):
        return "mapping"
    if isinstance(node, SequenceNode):
        return "sequence"
    return "scalar"


# --- encoding ---------------------------------------------------------------


def _version_node(version: Version) -> MappingNode:
    pairs: list[tuple[Node, Node]] = []
    if version.date:
        pairs.append((_str("date"), _str(version.date)))
    pairs.extend(_changes_pairs(version.public))
    if not version.internal.is_empty():
        pairs.append((_str("internal"), MappingNode(MAP_TAG, _changes_pairs(version.internal))))
    return MappingNode(MAP_TAG, pairs)


def _changes_pairs(changes: Changes) -> list[tuple[Node, Node]]:
    return [
        (_str(bucket.name), SequenceNode(SEQ_TAG, [_str(entry) for entry in bucket.entries]))
        for bucket in changes.categories
        if bucket.entries
    ]


def _str(value: str) -> ScalarNode:
    return ScalarNode(STR_TAG, value)


def _serialize(node: Node) -> str:
    return yaml.serialize(
        node,
        Dumper=yaml.SafeDumper,
        allow_unicode=True,
        width=float("inf"),
    )
