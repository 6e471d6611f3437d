"""Byte layout of reference frame attributes.

A frame is exchanged as a set of named attributes, each a byte string:

- ``name``: unicode string;
- ``parent_name``: unicode string, omitted for a root frame;
- ``translational_state``: position then velocity, 6 x ``<f8``;
- ``rotational_state``: quaternion scalar, quaternion vector, then
  attitude rate, 7 x ``<f8``;
- ``time``: ``<f8`` [TJD].

A unicode string is a big-endian ``int32`` count of UTF-16 code units
followed by the UTF-16BE code units.  Floats are little-endian IEEE 754
doubles.  Only the layout is handled here; transport is up to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import jax.numpy as jnp
import numpy as np

from framekit.attitude_representations import Quaternion
from framekit.frames.reference_frame import ReferenceFrame

logger = logging.getLogger(__name__)

NAME = "name"
PARENT_NAME = "parent_name"
TRANSLATIONAL_STATE = "translational_state"
ROTATIONAL_STATE = "rotational_state"
TIME = "time"

ATTRIBUTES = (NAME, PARENT_NAME, TRANSLATIONAL_STATE, ROTATIONAL_STATE, TIME)

_FLOAT64_LE = np.dtype("<f8")
_INT32_BE = np.dtype(">i4")


def encode_unicode_string(value: str) -> bytes:
    """Encode a string as a length-prefixed UTF-16BE byte string."""
    data = value.encode("utf-16-be")
    return np.array([len(data) // 2], dtype=_INT32_BE).tobytes() + data


def decode_unicode_string(data: bytes) -> str:
    """Decode a length-prefixed UTF-16BE byte string.

    Raises:
        ValueError: If *data* is shorter than its length prefix claims.
    """
    if len(data) < _INT32_BE.itemsize:
        raise ValueError(f"Unicode string needs at least 4 bytes, got {len(data)}")
    count = int(np.frombuffer(data, dtype=_INT32_BE, count=1)[0])
    end = _INT32_BE.itemsize + 2 * count
    if count < 0 or len(data) < end:
        raise ValueError(f"Unicode string of {count} code units truncated at {len(data)} bytes")
    return data[_INT32_BE.itemsize:end].decode("utf-16-be")


def _encode_doubles(values) -> bytes:
    return np.asarray(values, dtype=_FLOAT64_LE).tobytes()


def _decode_doubles(data: bytes, count: int, attribute: str) -> np.ndarray:
    size = count * _FLOAT64_LE.itemsize
    if len(data) < size:
        raise ValueError(f"Attribute {attribute!r} needs {size} bytes, got {len(data)}")
    return np.frombuffer(data, dtype=_FLOAT64_LE, count=count).astype(np.float64)


def encode_frame(frame: ReferenceFrame) -> dict[str, bytes]:
    """Encode every attribute of *frame*.

    Args:
        frame (ReferenceFrame): Frame to encode.

    Returns:
        dict[str, bytes]: Attribute name to payload.  ``parent_name`` is
            absent when the frame has no parent.
    """
    attributes = {NAME: encode_unicode_string(frame.name)}
    if frame.parent_name is not None:
        attributes[PARENT_NAME] = encode_unicode_string(frame.parent_name)

    attributes[TRANSLATIONAL_STATE] = _encode_doubles(
        np.concatenate([np.asarray(frame.position), np.asarray(frame.velocity)])
    )
    attributes[ROTATIONAL_STATE] = _encode_doubles(
        np.concatenate([np.asarray(frame.attitude.to_vector()), np.asarray(frame.attitude_rate)])
    )
    attributes[TIME] = _encode_doubles([frame.time])
    return attributes


def decode_frame(attributes: Mapping[str, bytes], frame: ReferenceFrame) -> ReferenceFrame:
    """Apply encoded attributes to *frame* in place.

    Attributes missing from *attributes* leave the corresponding state
    untouched, except that a ``name`` without a ``parent_name`` describes a
    root frame and clears the parent.  The transformation matrix is rebuilt
    from the received quaternion, which is taken as is (not renormalized).

    Args:
        attributes (Mapping[str, bytes]): Attribute name to payload.
        frame (ReferenceFrame): Frame to update.

    Returns:
        ReferenceFrame: *frame*, for chaining.

    Raises:
        ValueError: If a payload is shorter than its layout.
    """
    for key in attributes:
        if key not in ATTRIBUTES:
            logger.warning("Ignoring unknown reference frame attribute %r", key)

    if NAME in attributes:
        frame.name = decode_unicode_string(attributes[NAME])
    if PARENT_NAME in attributes:
        frame.parent_name = decode_unicode_string(attributes[PARENT_NAME])
    elif NAME in attributes:
        frame.parent_name = None

    if TRANSLATIONAL_STATE in attributes:
        state = _decode_doubles(attributes[TRANSLATIONAL_STATE], 6, TRANSLATIONAL_STATE)
        frame.position = state[:3]
        frame.velocity = state[3:]

    if ROTATIONAL_STATE in attributes:
        state = _decode_doubles(attributes[ROTATIONAL_STATE], 7, ROTATIONAL_STATE)
        frame.set_attitude_quaternion(Quaternion._from_internal(jnp.asarray(state[:4])))
        frame.attitude_rate = state[4:]

    if TIME in attributes:
        frame.time = float(_decode_doubles(attributes[TIME], 1, TIME)[0])

    return frame
