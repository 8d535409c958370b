"""
Scenario modelling constants.
Preset pathways and the pillar weighting used for impact totals.
"""

# Preset what-if pathways; adjustment values are percent unless type is target
PRESET_SCENARIOS: list[dict] = [
    {
        "id": "optimistic",
        "name": "Optimistic Growth",
        "description": "Best-case scenario with aggressive improvements",
        "adjustments": {
            "scope1Emissions": {"type": "percentage", "value": -30},
            "scope2Emissions": {"type": "percentage", "value": -40},
            "renewableEnergy": {"type": "percentage", "value": 50},
            "waterUsage":      {"type": "percentage", "value": -25},
            "wasteRecycling":  {"type": "percentage", "value": 40},
            "diversityScore":  {"type": "percentage", "value": 25},
        },
    },
    {
        "id": "realistic",
        "name": "Realistic Progress",
        "description": "Moderate improvements with current resources",
        "adjustments": {
            "scope1Emissions": {"type": "percentage", "value": -15},
            "scope2Emissions": {"type": "percentage", "value": -20},
            "renewableEnergy": {"type": "percentage", "value": 25},
            "waterUsage":      {"type": "percentage", "value": -12},
            "wasteRecycling":  {"type": "percentage", "value": 20},
            "diversityScore":  {"type": "percentage", "value": 10},
        },
    },
    {
        "id": "conservative",
        "name": "Conservative Baseline",
        "description": "Minimal changes, business as usual",
        "adjustments": {
            "scope1Emissions": {"type": "percentage", "value": -5},
            "scope2Emissions": {"type": "percentage", "value": -8},
            "renewableEnergy": {"type": "percentage", "value": 10},
            "waterUsage":      {"type": "percentage", "value": -5},
            "wasteRecycling":  {"type": "percentage", "value": 8},
            "diversityScore":  {"type": "percentage", "value": 5},
        },
    },
    {
        "id": "netzero2030",
        "name": "Net Zero by 2030",
        "description": "Aggressive decarbonization pathway",
        "adjustments": {
            "scope1Emissions": {"type": "percentage", "value": -80},
            "scope2Emissions": {"type": "percentage", "value": -100},
            "scope3Emissions": {"type": "percentage", "value": -50},
            "renewableEnergy": {"type": "target", "value": 100},
            "carbonOffset":    {"type": "percentage", "value": 200},
        },
    },
    {
        "id": "circular",
        "name": "Circular Economy",
        "description": "Focus on waste reduction and recycling",
        "adjustments": {
            "wasteGenerated": {"type": "percentage", "value": -40},
            "wasteRecycling": {"type": "percentage", "value": 60},
            "waterRecycling": {"type": "percentage", "value": 50},
            "materialReuse":  {"type": "percentage", "value": 70},
        },
    },
]

# Metric-name substrings per pillar, matched case-sensitively in this order
IMPACT_BUCKETS: dict[str, tuple[str, ...]] = {
    "environmental": ("emission", "water", "waste"),
    "social": ("diversity", "safety", "employee"),
    "governance": ("board", "governance"),
}

# Share of the summed E+S+G adjustment magnitude reported as financial impact
FINANCIAL_IMPACT_WEIGHT = 0.15

# Sensitivity sweep spread (percentage points) above which a metric is "high"
HIGH_SENSITIVITY_SPREAD = 50.0

# What-if recommendation thresholds (absolute percent change from baseline)
RECOMMENDATION_THRESHOLD = 20.0
HIGH_PRIORITY_THRESHOLD = 50.0
