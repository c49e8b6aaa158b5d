"""Material type tags and shared parameter validation."""

from enum import IntEnum


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Stored per material in the arena and used for scatter dispatch in the
    integrator.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2
    ABSORBING = 3


def validate_albedo(albedo) -> tuple[float, float, float]:
    """Convert an RGB albedo to a float tuple, checking each channel.

    Args:
        albedo: Three reflectance values.

    Returns:
        The albedo as a tuple of floats.

    Raises:
        ValueError: If the albedo does not have three components or any
            component lies outside [0, 1].
    """
    values = tuple(float(c) for c in albedo)
    if len(values) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(values)}")
    for i, c in enumerate(values):
        if c < 0.0 or c > 1.0:
            raise ValueError(
                f"Albedo component {i} = {c} is outside [0, 1]. "
                "Albedo values must be in [0, 1] for energy conservation."
            )
    return values
