import zlib
from .errors import CorruptObjectError, TruncatedObjectError

# Compression used as the storage transport for every object (zlib, like git).

def encode(data:bytes) -> bytes:
    return zlib.compress(data, zlib.Z_DEFAULT_COMPRESSION)

def decode(data:bytes) -> bytes:
    decompressor = zlib.decompressobj()
    try:
        result = decompressor.decompress(data)
    except zlib.error as e:
        raise CorruptObjectError(f"Not a valid zlib stream: {e}") from e
    #a stream that never reached its end marker was cut off
    if not decompressor.eof:
        raise TruncatedObjectError(f"zlib stream ended unexpectedly after {len(data)} bytes.")
    return result
