"""
Materiality topic catalog.
Topics follow the ESRS topical standards (E1-E5, S1-S4, G1).
"""

from esgenius.materiality.models import MaterialityTopic

MATERIALITY_TOPICS: tuple[MaterialityTopic, ...] = (
    MaterialityTopic(id="climate_change", name="Climate Change", category="environmental", esrs_code="E1",
                     description="GHG emissions, climate adaptation, transition risks"),
    MaterialityTopic(id="energy_management", name="Energy Management", category="environmental", esrs_code="E1",
                     description="Energy consumption, renewable energy, energy efficiency"),
    MaterialityTopic(id="water_management", name="Water & Marine Resources", category="environmental", esrs_code="E3",
                     description="Water consumption, water quality, marine ecosystems"),
    MaterialityTopic(id="biodiversity", name="Biodiversity & Ecosystems", category="environmental", esrs_code="E4",
                     description="Ecosystem impacts, species protection, land use"),
    MaterialityTopic(id="circular_economy", name="Resource Use & Circular Economy", category="environmental",
                     esrs_code="E5", description="Material consumption, waste management, circularity"),
    MaterialityTopic(id="pollution", name="Pollution", category="environmental", esrs_code="E2",
                     description="Air, water, soil pollution prevention"),
    MaterialityTopic(id="own_workforce", name="Own Workforce", category="social", esrs_code="S1",
                     description="Working conditions, equal treatment, social protection"),
    MaterialityTopic(id="value_chain_workers", name="Workers in Value Chain", category="social", esrs_code="S2",
                     description="Supply chain labor conditions, contractor workers"),
    MaterialityTopic(id="affected_communities", name="Affected Communities", category="social", esrs_code="S3",
                     description="Community impacts, indigenous rights, land rights"),
    MaterialityTopic(id="consumers_end_users", name="Consumers & End-users", category="social", esrs_code="S4",
                     description="Product safety, accessibility, consumer rights"),
    MaterialityTopic(id="business_conduct", name="Business Conduct", category="governance", esrs_code="G1",
                     description="Corporate culture, anti-corruption, political engagement"),
    MaterialityTopic(id="scope3_emissions", name="Scope 3 Emissions", category="environmental", esrs_code="E1",
                     description="Value chain emissions, supplier emissions"),
    MaterialityTopic(id="employee_safety", name="Occupational Health & Safety", category="social", esrs_code="S1",
                     description="Workplace safety, injury rates, health programs"),
    MaterialityTopic(id="human_capital", name="Human Capital Development", category="social", esrs_code="S1",
                     description="Training, skills development, career progression"),
    MaterialityTopic(id="diversity_inclusion", name="Diversity & Inclusion", category="social", esrs_code="S1",
                     description="Gender equality, non-discrimination, inclusive culture"),
    MaterialityTopic(id="data_privacy", name="Data Protection & Privacy", category="governance", esrs_code="G1",
                     description="Personal data protection, cybersecurity, digital rights"),
    MaterialityTopic(id="supply_chain", name="Supply Chain Management", category="governance", esrs_code="G1",
                     description="Supplier assessment, due diligence, responsible sourcing"),
)

# Percent weights per stakeholder group; each slider ranges 0-50
DEFAULT_STAKEHOLDER_WEIGHTS: dict[str, int] = {
    "investors": 25,
    "employees": 20,
    "customers": 20,
    "communities": 15,
    "regulators": 10,
    "suppliers": 10,
}

MAX_STAKEHOLDER_WEIGHT = 50


def get_topic(topic_id: str) -> MaterialityTopic | None:
    """Look up a catalog topic by id."""
    for topic in MATERIALITY_TOPICS:
        if topic.id == topic_id:
            return topic
    return None


def topics_by_category(category: str) -> list[MaterialityTopic]:
    return [t for t in MATERIALITY_TOPICS if t.category == category]
