"""Explicit per-stream random number generation for Taichi kernels.

Every sampling routine in the renderer takes the current generator state as a
``ti.u32`` argument and returns the advanced state alongside its result. A
render kernel derives one independent stream per image row from the render
seed, so the output depends only on the seed and not on how rows are
scheduled across threads.

The generator is a 32-bit xorshift (13, 17, 5) seeded through a Wang-style
integer hash. Right shifts are masked so they stay logical regardless of how
the backend treats the operand's signedness.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.core.rng import random_f32, seed_stream
    >>> @ti.kernel
    ... def draw() -> ti.f32:
    ...     state = seed_stream(ti.cast(7, ti.u32), 0)
    ...     value, state = random_f32(state)
    ...     return value
"""

import taichi as ti

# Used when a hashed seed collapses to zero (xorshift's fixed point)
FALLBACK_STATE = 0x6D2B79F5

# 24 bits of mantissa give exactly representable f32 values in [0, 1)
_FLOAT_BITS_MASK = 0xFFFFFF
_FLOAT_SCALE = 1.0 / 16777216.0


@ti.func
def hash_u32(value: ti.u32) -> ti.u32:
    """Scramble a 32-bit integer (Wang hash).

    Args:
        value: Input integer.

    Returns:
        A well mixed 32-bit integer.
    """
    h = ti.cast(value, ti.u32)
    h = (h ^ ti.cast(61, ti.u32)) ^ ((h >> 16) & ti.cast(0xFFFF, ti.u32))
    h = h * ti.cast(9, ti.u32)
    h = h ^ ((h >> 4) & ti.cast(0x0FFFFFFF, ti.u32))
    h = h * ti.cast(0x27D4EB2D, ti.u32)
    h = h ^ ((h >> 15) & ti.cast(0x1FFFF, ti.u32))
    return h


@ti.func
def xorshift32(state: ti.u32) -> ti.u32:
    """Advance a xorshift32 generator by one step.

    Args:
        state: Current non-zero state.

    Returns:
        The next state.
    """
    x = ti.cast(state, ti.u32)
    x = x ^ (x << 13)
    x = x ^ ((x >> 17) & ti.cast(0x7FFF, ti.u32))
    x = x ^ (x << 5)
    return x


@ti.func
def seed_stream(seed: ti.u32, stream: ti.i32) -> ti.u32:
    """Derive the initial state of an independent random stream.

    Args:
        seed: Render seed shared by all streams.
        stream: Stream index (the image row for render kernels).

    Returns:
        A non-zero generator state.
    """
    stream_hash = hash_u32(ti.cast(stream, ti.u32) + ti.cast(1, ti.u32))
    state = hash_u32(ti.cast(seed, ti.u32) ^ stream_hash)
    if state == 0:
        state = ti.cast(FALLBACK_STATE, ti.u32)
    return state


@ti.func
def random_f32(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Args:
        state: Current generator state.

    Returns:
        Tuple of (value, next_state).
    """
    next_state = xorshift32(state)
    value = ti.cast(next_state & ti.cast(_FLOAT_BITS_MASK, ti.u32), ti.f32) * _FLOAT_SCALE
    return value, next_state


@ti.func
def random_between(low: ti.f32, high: ti.f32, state: ti.u32):
    """Draw a uniform float in [low, high).

    Returns:
        Tuple of (value, next_state).
    """
    unit, next_state = random_f32(state)
    return low + (high - low) * unit, next_state


def normalize_seed(seed: int) -> int:
    """Fold an arbitrary Python integer into the u32 range accepted by kernels."""
    return int(seed) & 0xFFFFFFFF
