"""Heart rate zone model: five contiguous zones covering [0, ceiling]."""

from __future__ import annotations

from dataclasses import dataclass

from load_engine.models.enums import ZoneModelType


@dataclass(frozen=True)
class HrZone:
    """A single HR zone with inclusive bpm bounds."""

    zone: int
    min: float
    max: float
    label: str = ""

    def to_dict(self) -> dict:
        return {"zone": self.zone, "min": self.min, "max": self.max, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict) -> HrZone:
        return cls(
            zone=int(data["zone"]),
            min=data["min"],
            max=data["max"],
            label=str(data.get("label", "")),
        )


@dataclass(frozen=True)
class ZoneModelResult:
    """Output of the zone resolver.

    ``source_value`` is the LTHR or HRmax the zones were anchored on.
    """

    zones: tuple[HrZone, ...]
    type: ZoneModelType
    source_value: float
    estimated_max_hr: float
