from typing import NamedTuple
from .errors import InvalidObjectIdError

# Type aliases and structures that define the object model of the store.

_ID_LEN = 20 # raw sha1 digest
_ID_STR_LEN = 40
_HEX_CHARS = frozenset("0123456789abcdef")

class ObjectId(str):
    """Lowercase hex sha1 digest of an object's envelope (40 characters).

    Every instance is validated on construction, no matter whether the text came
    from a digest computed here or from user input, so anything holding an
    ObjectId can safely derive a storage path from it.
    """
    __slots__ = ()

    def __new__(cls, value:str):
        if(not isinstance(value, str)):
            raise InvalidObjectIdError(repr(value), f"expected str but got {type(value).__name__}")
        if(len(value) != _ID_STR_LEN):
            raise InvalidObjectIdError(value, f"expected {_ID_STR_LEN} characters but got {len(value)}")
        if(not all(c in _HEX_CHARS for c in value)):
            raise InvalidObjectIdError(value, "only lowercase hex characters are allowed")
        return super().__new__(cls, value)

    @classmethod
    def validate(cls, value:str) -> "ObjectId":
        return cls(value)

    @classmethod
    def from_digest(cls, raw:bytes) -> "ObjectId":
        """Hex-encodes a raw 20 byte digest, as stored inside tree payloads."""
        if(len(raw) != _ID_LEN):
            raise InvalidObjectIdError(raw.hex(), f"expected {_ID_LEN} digest bytes but got {len(raw)}")
        return cls(raw.hex())

    @property
    def raw(self) -> bytes:
        return bytes.fromhex(self)

    @property
    def fanout(self) -> str:
        return self[:2]

    @property
    def rest(self) -> str:
        return self[2:]

def is_object_id_str(value:str) -> bool:
    return isinstance(value, str) and len(value) == _ID_STR_LEN and all(c in _HEX_CHARS for c in value)

#============================================================
# Object kinds
#============================================================
BLOB = "blob"
TREE = "tree"
OBJECT_KINDS = (BLOB, TREE)

#============================================================
# Tree entry modes
#============================================================
MODE_TREE = "40000"
MODE_FILE = "100644"
MODE_EXECUTABLE = "100755"
MODE_SYMLINK = "120000"
TREE_MODES = (MODE_TREE, MODE_FILE, MODE_EXECUTABLE, MODE_SYMLINK)

# an object as it looks after decompression: "{kind} {size}\0{payload}"
Envelope = NamedTuple("Envelope",
    [('kind', str),
     ('size', int), # declared size, as read from the header
     ('payload', bytes)])

TreeEntry = NamedTuple("TreeEntry",
    [('mode', str),
     ('name', str), # a single path component
     ('object_id', ObjectId)])

Tree = list[TreeEntry]
