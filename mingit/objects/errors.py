# Exceptions raised by the object subsystem.
# Everything derives from ObjectStoreError so callers (e.g. the cli) can report
# any failure of a read or write operation with a single except clause.

class ObjectStoreError(Exception):
    pass

class InvalidObjectIdError(ObjectStoreError, ValueError):
    def __init__(self, value:str, reason:str):
        super().__init__(f"Invalid object id '{value}': {reason}.")
        self.value = value

#============================================================
# Storage
#============================================================
class ObjectIoError(ObjectStoreError):
    def __init__(self, message:str, object_id:str|None=None, path:str|None=None):
        super().__init__(message)
        self.object_id = object_id
        self.path = path

class ObjectNotFoundError(ObjectIoError):
    pass

class ObjectPermissionError(ObjectIoError):
    pass

#============================================================
# Compression transport
#============================================================
class DecodeError(ObjectStoreError):
    pass

class CorruptObjectError(DecodeError):
    pass

class TruncatedObjectError(DecodeError):
    pass

#============================================================
# Envelope
#============================================================
class FormatError(ObjectStoreError):
    pass

class MissingHeaderError(FormatError):
    pass

class MalformedHeaderError(FormatError):
    pass

class UnknownKindError(FormatError):
    def __init__(self, kind:str):
        super().__init__(f"Unknown object kind '{kind}'.")
        self.kind = kind

class UnexpectedKindError(FormatError):
    def __init__(self, expected:str, actual:str):
        super().__init__(f"Expected object of kind '{expected}' but got '{actual}'.")
        self.expected = expected
        self.actual = actual

#============================================================
# Tree payloads
#============================================================
class TreeParseError(ObjectStoreError):
    pass

class TruncatedTreeError(TreeParseError):
    pass

class InvalidTreeEncodingError(TreeParseError):
    pass

#============================================================
# Tree building
#============================================================
class BuildError(ObjectStoreError):
    def __init__(self, message:str, path:str):
        super().__init__(message)
        self.path = path
