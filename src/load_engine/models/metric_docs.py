"""Plain-language documentation of the load metrics, for display and coaching."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MetricDoc:
    id: str
    label: str
    definition: str
    why_it_matters: str
    interpretation: dict[str, str] = field(default_factory=dict)


METRIC_DOCS: dict[str, MetricDoc] = {
    "ctl": MetricDoc(
        id="ctl",
        label="Fitness (CTL)",
        definition="Chronic training load: exponential average of load over 42 days.",
        why_it_matters="Accumulated fitness. Higher CTL tolerates more volume and intensity.",
        interpretation={
            "optimal": "Gradual growth of 5-8 points per week is a healthy progression.",
            "risk": "Rises above 10 per week sharply increase structural injury risk.",
        },
    ),
    "atl": MetricDoc(
        id="atl",
        label="Fatigue (ATL)",
        definition="Acute training load: exponential average of load over 7 days.",
        why_it_matters="Fatigue carried this week. Rises quickly after hard sessions.",
        interpretation={
            "high": "ATL far above CTL means a necessary or excessive overload block.",
        },
    ),
    "tsb": MetricDoc(
        id="tsb",
        label="Form (TSB)",
        definition="Training stress balance: yesterday's CTL minus yesterday's ATL.",
        why_it_matters="Whether you are ready to race or need to rest.",
        interpretation={
            "low": "Below -30: heavy overload, watch for injury.",
            "optimal": "-10 to -30: productive training zone.",
            "high": "Above +5: fresh, suited to races and tests.",
        },
    ),
    "monotony": MetricDoc(
        id="monotony",
        label="Monotony",
        definition="Weekly mean daily load divided by its standard deviation.",
        why_it_matters="Same-intensity training every day is harmful; the body needs variation.",
        interpretation={
            "low": "Below 1.5: good variation between hard and easy days.",
            "optimal": "1.5 to 1.9: moderate variation.",
            "high": "2.0 and above: not enough rest or recovery days.",
        },
    ),
    "strain": MetricDoc(
        id="strain",
        label="Strain",
        definition="Total weekly load multiplied by monotony.",
        why_it_matters="Combined overtraining risk indicator.",
        interpretation={
            "high": "Accumulating fatigue without enough structural recovery.",
        },
    ),
}
