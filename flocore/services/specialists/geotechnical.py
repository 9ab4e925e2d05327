"""Geotechnical engineering sub-tasks and specialists"""

from .base import geotechnical_specialist
from .schemas import NUMBER, POINT, STRING, array, enum, obj

DOMAIN = "geotechnical"
DOMAIN_LABEL = "geotechnical engineering"
COMMON_INPUTS = ("soil parameters", "geometry", "loads or water conditions")

TASKS = {
    "shallow_foundation": "Designing or analyzing shallow foundations like footings for bearing capacity.",
    "deep_foundation": "Designing or analyzing deep foundations like piles for axial capacity.",
    "foundation_settlement": "Calculating immediate or consolidation settlement for any foundation type.",
    "slope_stability": "Analyzing the factor of safety of a soil slope.",
}

_LABEL = obj({"x": NUMBER, "y": NUMBER, "text": STRING, "anchor": enum("start", "middle", "end")})

FOUNDATION_DRAWING = obj(
    {
        "viewBox": obj({"width": NUMBER, "height": NUMBER}),
        "footing": obj({"x": NUMBER, "y": NUMBER, "width": NUMBER, "height": NUMBER}),
        "soilLayers": array(obj({"depthTop": NUMBER, "depthBottom": NUMBER, "description": STRING})),
        "waterTableDepth": NUMBER,
        "pressureBulb": obj({"cx": NUMBER, "cy": NUMBER, "rx": NUMBER, "ry": NUMBER}),
        "labels": array(_LABEL),
    },
    required=["viewBox", "footing", "soilLayers", "labels"],
    description="Cross-section drawing, (0,0) at the ground surface on the left, units in meters.",
)

SLIP_CIRCLE_DRAWING = obj(
    {
        "viewBox": obj({"width": NUMBER, "height": NUMBER}),
        "slopeProfile": array(POINT),
        "soilLayers": array(obj({"points": array(POINT), "description": STRING})),
        "slipCircle": obj({"cx": NUMBER, "cy": NUMBER, "radius": NUMBER}),
        "waterTable": array(POINT),
    },
    required=["viewBox", "slopeProfile", "soilLayers", "slipCircle"],
)

SPECIALISTS = [
    geotechnical_specialist(
        key="shallow_foundation",
        name="Shallow Foundation Analysis",
        calculation_type="SHALLOW_FOUNDATION_BEARING_CAPACITY",
        specialty="shallow foundation design",
        instructions="""6.  **Two-part analysis**: Calculate the ultimate and allowable bearing capacity, then the total estimated settlement (elastic + consolidation). The conclusion summarizes BOTH.
7.  **drawingSpec**: Generate a drawing specification of the foundation cross-section with the footing, soil layers and a representative pressure bulb.""",
        required_inputs=("footing dimensions", "founding depth", "soil parameters", "applied load"),
        extra_properties={"drawingSpec": FOUNDATION_DRAWING},
    ),
    geotechnical_specialist(
        key="deep_foundation",
        name="Deep Foundation Analysis",
        calculation_type="DEEP_FOUNDATION_AXIAL_CAPACITY",
        specialty="deep foundations (axial capacity of a single pile)",
        instructions="""6.  **governingTheory**: State the methods used (e.g., 'Alpha-Method for clays, Beta-Method for sands').
7.  **calculationSteps**: For each soil layer calculate the skin friction, then the end bearing at the pile tip, the ultimate capacity (Qu) and, with a Factor of Safety, the allowable capacity (Qa).
8.  **drawingSpec**: Generate a drawing specification of the pile elevation showing the soil layers.""",
        required_inputs=("pile type and dimensions", "pile length", "soil profile"),
        extra_properties={"drawingSpec": FOUNDATION_DRAWING},
    ),
    geotechnical_specialist(
        key="foundation_settlement",
        name="Foundation Settlement Analysis",
        calculation_type="FOUNDATION_SETTLEMENT_ANALYSIS",
        specialty="foundation settlement analysis",
        instructions="""6.  **governingTheory**: State the methods used (e.g., 'Elastic Theory for immediate settlement', 'Terzaghi's Theory of Consolidation').
7.  **calculationSteps**: Calculate Immediate (Elastic) Settlement and Primary Consolidation Settlement (Cc, Cr, preconsolidation pressure), then sum them to the Total Settlement.
8.  **recommendations**: Provide recommendations if the settlement exceeds allowable limits.""",
        required_inputs=("foundation size", "applied pressure", "soil compressibility parameters"),
    ),
    geotechnical_specialist(
        key="slope_stability",
        name="Slope Stability Analysis",
        calculation_type="SLOPE_STABILITY_ANALYSIS",
        specialty="slope stability analysis",
        instructions="""6.  **governingTheory**: State the method used (e.g., 'Ordinary Method of Slices (Fellenius)', 'Bishop's Simplified Method').
7.  **calculationSteps**: Divide the failure mass into vertical slices, calculate each slice's weight and resisting/driving forces, sum them and calculate the overall Factor of Safety (FoS).
8.  **slipCircleSpec**: Generate a drawing specification of the slope and the critical slip circle.
9.  **conclusion**: State the Factor of Safety and whether the slope is stable (typically FoS > 1.5); suggest remediation if it is not.""",
        required_inputs=("slope geometry", "soil strength parameters", "groundwater conditions"),
        extra_properties={"slipCircleSpec": SLIP_CIRCLE_DRAWING},
    ),
]
