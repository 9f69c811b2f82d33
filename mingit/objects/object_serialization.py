import hashlib
from typing import Iterable
from .object_model import *
from .errors import (MissingHeaderError, MalformedHeaderError, UnknownKindError,
                     TruncatedTreeError, InvalidTreeEncodingError)

_HEADER_ENCODING = 'ascii'
_NAME_ENCODING = 'utf-8'
_ID_LEN = 20

def get_object_id(envelope:bytes | bytearray) -> ObjectId:
    """The id of an object is the sha1 of its complete, uncompressed envelope."""
    return ObjectId.from_digest(hashlib.sha1(envelope).digest())

def hash_object(kind:str, payload:bytes) -> ObjectId:
    return get_object_id(wrap(kind, payload))

#============================================================
# Envelope
#============================================================
def wrap(kind:str, payload:bytes) -> bytes:
    header = f"{kind} {len(payload)}\x00".encode(_HEADER_ENCODING)
    return header + bytes(payload)

def unwrap(data:bytes, strict:bool=False) -> Envelope:
    """Splits the envelope into kind, declared size, and payload.

    The declared size is only compared to the payload length when strict is set,
    otherwise the payload is everything after the header's NUL byte.
    """
    nul = data.find(b'\x00')
    if nul < 0:
        raise MissingHeaderError("Object has no header: no NUL byte found.")
    try:
        header = data[:nul].decode(_HEADER_ENCODING)
    except UnicodeDecodeError as e:
        raise MalformedHeaderError(f"Object header is not ascii: {data[:nul]!r}") from e
    kind, sep, size_str = header.partition(' ')
    if not sep:
        raise MalformedHeaderError(f"Object header '{header}' has no space between kind and size.")
    if not size_str.isdigit():
        raise MalformedHeaderError(f"Object header '{header}' has an invalid size '{size_str}'.")
    if kind not in OBJECT_KINDS:
        raise UnknownKindError(kind)
    size = int(size_str)
    payload = bytes(data[nul+1:])
    if strict and size != len(payload):
        raise MalformedHeaderError(f"Expected object body of {size} bytes but got {len(payload)}.")
    return Envelope(kind, size, payload)

#============================================================
# Tree payloads
# each entry is "{mode} {name}\0" followed by the 20 raw digest bytes
#============================================================
def _name_to_bytes(name:str) -> bytes:
    # surrogateescape round-trips file names that are not valid utf-8 (see os.fsdecode)
    return name.encode(_NAME_ENCODING, 'surrogateescape')

def _enforce_tree_entry(entry:TreeEntry) -> TreeEntry:
    if entry.mode not in TREE_MODES:
        raise ValueError(f"Unknown tree entry mode '{entry.mode}' for '{entry.name}'.")
    if not entry.name:
        raise ValueError("Tree entry name must not be empty.")
    if '/' in entry.name or '\x00' in entry.name:
        raise ValueError(f"Tree entry name must be a single path component, but was '{entry.name}'.")
    if not isinstance(entry.object_id, ObjectId):
        return entry._replace(object_id=ObjectId(entry.object_id))
    return entry

def sort_entries(entries:Iterable[TreeEntry]) -> Tree:
    """Canonical order: byte-wise comparison of the encoded names."""
    return sorted(entries, key=lambda entry: _name_to_bytes(entry.name))

def serialize_tree(entries:Iterable[TreeEntry]) -> bytes:
    """Serializes entries that are already in canonical order (see sort_entries)."""
    result = bytearray()
    for entry in entries:
        entry = _enforce_tree_entry(entry)
        result += entry.mode.encode(_HEADER_ENCODING)
        result += b' '
        result += _name_to_bytes(entry.name)
        result += b'\x00'
        result += entry.object_id.raw
    return bytes(result)

def parse_tree(payload:bytes) -> Tree:
    # the payload is scanned as raw bytes, the digests can contain any byte value, including NUL
    result = []
    pos = 0
    end = len(payload)
    while pos < end:
        space = payload.find(b' ', pos)
        if space < 0:
            raise TruncatedTreeError(f"Tree entry at offset {pos} has no space after its mode.")
        nul = payload.find(b'\x00', space + 1)
        if nul < 0:
            raise TruncatedTreeError(f"Tree entry at offset {pos} has no NUL after its name.")
        digest_end = nul + 1 + _ID_LEN
        if digest_end > end:
            raise TruncatedTreeError(
                f"Tree entry at offset {pos} needs {_ID_LEN} digest bytes but only {end - nul - 1} are left.")
        try:
            mode = payload[pos:space].decode(_NAME_ENCODING)
            name = payload[space+1:nul].decode(_NAME_ENCODING)
        except UnicodeDecodeError as e:
            raise InvalidTreeEncodingError(f"Tree entry at offset {pos} is not valid utf-8: {e}") from e
        result.append(TreeEntry(mode, name, ObjectId.from_digest(payload[nul+1:digest_end])))
        pos = digest_end
    return result

def tree_to_bytes(entries:Iterable[TreeEntry]) -> bytes:
    """Sorts, serializes, and wraps the entries into a complete tree envelope."""
    return wrap(TREE, serialize_tree(sort_entries(entries)))

def blob_to_bytes(data:bytes) -> bytes:
    return wrap(BLOB, data)
