"""Mode presets: numeric layout and pacing parameters per caption mode.

WHY: Talking-head and cinematic videos need different caption pacing.
Talking-head clips get shorter lines, a tighter reading-speed ceiling and
shorter chunks; cinematic clips are slightly more relaxed. The builder and
normalizer only see the numbers, never the mode name.

HOW: MODE_PRESETS maps each SubtitleMode to a frozen ModePreset, built
once at import. resolve_preset() accepts a mode enum member or its name.

RULES:
- Presets are frozen; use dataclasses.replace() to derive a custom one.
- TALKING_HEAD.max_duration (4.0s) < CINEMATIC_CLIP.max_duration (5.0s).
- An unknown mode is a programming error: raise ValueError, never default.
"""

from typing import Dict, Union

from .models import CpsRange, ModePreset, SubtitleMode

# Single speaker facing camera: 24-32 chars per line range, fast pacing
PRESET_TALKING_HEAD = ModePreset(
    mode=SubtitleMode.TALKING_HEAD,
    max_chars_per_line=28,
    max_lines=2,
    target_cps=CpsRange(min=12.0, max=18.0),
    max_duration=4.0,
)

# Cinematic clip: 32-40 chars per line range, relaxed pacing
PRESET_CINEMATIC_CLIP = ModePreset(
    mode=SubtitleMode.CINEMATIC_CLIP,
    max_chars_per_line=36,
    max_lines=2,
    target_cps=CpsRange(min=10.0, max=14.0),
    max_duration=5.0,
)

MODE_PRESETS: Dict[SubtitleMode, ModePreset] = {
    SubtitleMode.TALKING_HEAD: PRESET_TALKING_HEAD,
    SubtitleMode.CINEMATIC_CLIP: PRESET_CINEMATIC_CLIP,
}


def resolve_preset(mode: Union[SubtitleMode, str]) -> ModePreset:
    """Return the preset for a caption mode.

    Args:
        mode: A SubtitleMode member or its name ("TALKING_HEAD",
            case-insensitive).

    Returns:
        The frozen ModePreset for that mode.

    Raises:
        ValueError: If the mode is not recognized.
    """
    if isinstance(mode, SubtitleMode):
        return MODE_PRESETS[mode]

    key = str(mode).strip().upper()
    try:
        return MODE_PRESETS[SubtitleMode(key)]
    except ValueError:
        raise ValueError(
            "Unknown mode '{}'. Available: {}".format(
                mode, ", ".join(m.value for m in MODE_PRESETS)
            )
        ) from None
