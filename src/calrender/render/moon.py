"""
calrender.render.moon
---------------------
SVG drawing of a moon disc: dark circle, lit region bounded by the limb and
the elliptical terminator, and a thin border.
"""
from __future__ import annotations

import math

from ..core.types import ColorScheme, MoonOverlay


def lit_path(phase: float, r: float) -> str:
    """
    Path of the lit part of a disc of radius ``r`` centered at the origin.

    The limb is the half circle on the lit side (right while waxing); the
    terminator is a half ellipse with semi-axis |cos(2 pi phase)| * r that
    bulges toward the lit side for crescents and away from it for gibbous
    phases.
    """
    ew = max(0.01, abs(math.cos(2 * math.pi * phase)) * r)
    limb_sweep = 0 if phase < 0.5 else 1
    crescent = phase < 0.25 or phase > 0.75
    term_sweep = 1 - limb_sweep if crescent else limb_sweep
    return (
        f"M 0,{r:.1f} A {r:.1f},{r:.1f} 0 0,{limb_sweep} 0,{-r:.1f} "
        f"A {ew:.2f},{r:.1f} 0 0,{term_sweep} 0,{r:.1f} Z"
    )


def moon_svg(overlay: MoonOverlay, colors: ColorScheme) -> str:
    s = overlay.sample
    r = overlay.radius
    parts = [
        f'<g class="moon" transform="translate({overlay.cx:.1f}, {overlay.cy:.1f}) '
        f'rotate({overlay.rotation_deg:.1f})">',
        f'<circle cx="0" cy="0" r="{r:.1f}" fill="{colors.moon_dark}"/>',
    ]
    if s.illumination >= 0.995:
        parts.append(f'<circle cx="0" cy="0" r="{r:.1f}" fill="{colors.moon_light}"/>')
    elif s.illumination > 0.005:
        parts.append(f'<path d="{lit_path(s.phase, r)}" fill="{colors.moon_light}"/>')
    parts.append(
        f'<circle cx="0" cy="0" r="{r:.1f}" fill="none" stroke="{colors.moon_border}" '
        f'stroke-width="{overlay.border_width:.2f}"/>'
    )
    parts.append("</g>")
    return "".join(parts)
