"""Structural engineering sub-tasks and specialists"""

from .base import Preflight, structural_specialist
from .schemas import CALCULATION_STEP, NUMBER, POINT, STRING, array, enum, obj

DOMAIN = "structural"
DOMAIN_LABEL = "structural engineering"
COMMON_INPUTS = ("member type and geometry", "loads", "material grades")

TASKS = {
    "reinforced_concrete_beam_design": "Designing flexural reinforcement in concrete beams.",
    "slender_column_design": "Analyzing or designing concrete columns with slenderness/P-delta effects.",
    "two_way_slab_design": "Designing concrete floor slabs supported on all sides.",
    "punching_shear_design": "Checking two-way shear in flat plate slabs at columns.",
    "retaining_wall_design": "Full stability analysis and design of cantilever retaining walls.",
    "steel_connection_design": "Designing bolted shear connections between steel members.",
    "welded_connection_design": "Designing welded connections between steel members.",
    "column_base_plate_design": "Designing the steel plate under a column connecting to a footing.",
    "composite_beam_design": "Designing steel beams acting compositely with a concrete slab.",
    "seismic_load_analysis": "Calculating the overall seismic forces on a building using ELF procedure.",
    "wind_load_analysis": "Calculating the overall wind pressures and forces on a building.",
}

_REBAR = obj({"cx": NUMBER, "cy": NUMBER, "radius": NUMBER, "label": STRING}, required=["cx", "cy", "radius"])

SECTION_DRAWING = obj(
    {
        "viewBox": obj({"width": NUMBER, "height": NUMBER}),
        "section": obj({"width": NUMBER, "height": NUMBER}),
        "stirrup": obj(
            {"shape": STRING, "x": NUMBER, "y": NUMBER, "width": NUMBER, "height": NUMBER, "label": STRING}
        ),
        "mainRebar": array(_REBAR),
        "topRebar": array(_REBAR),
        "dimensions": array(
            obj(
                {"type": enum("horizontal", "vertical"), "start": NUMBER, "end": NUMBER, "label": STRING,
                 "x": NUMBER, "y": NUMBER},
                required=["type", "start", "end", "label"],
            )
        ),
        "labels": array(obj({"x": NUMBER, "y": NUMBER, "text": STRING, "anchor": enum("start", "middle", "end")})),
    },
    required=["viewBox", "section", "stirrup", "mainRebar", "dimensions", "labels"],
    description="Cross-section drawing, (0,0) at the bottom-left of the concrete section, units in mm.",
)

SPECIALISTS = [
    structural_specialist(
        key="reinforced_concrete_beam_design",
        name="Reinforced Concrete Beam Design",
        calculation_type="REINFORCED_BEAM_DESIGN",
        specialty="reinforced concrete beam design",
        instructions="""6.  **Full Design**: You MUST perform BOTH flexural (main rebar) design AND shear (stirrup) design.
7.  **calculationSteps**: This section is for FLEXURAL design steps ONLY.
8.  **shearCalculationSteps**: This section is for SHEAR design steps ONLY. Include steps for calculating Vu, Vc, Vs, and determining stirrup spacing.
9.  **diagramData**: Generate plot data for the Shear Force Diagram (SFD) and Bending Moment Diagram (BMD) as points where x is position (m) and y is value (kN, kNm). Assume a simply supported beam if boundary conditions aren't given.
10. **drawingSpec**: Generate a drawing specification of the beam cross-section.""",
        required_inputs=("span", "loads", "material"),
        extra_properties={
            "shearCalculationSteps": array(CALCULATION_STEP),
            "diagramData": obj({"sfd": array(POINT), "bmd": array(POINT), "length": NUMBER}),
            "drawingSpec": SECTION_DRAWING,
        },
    ),
    structural_specialist(
        key="slender_column_design",
        name="Slender Column Design",
        calculation_type="SLENDER_COLUMN_DESIGN",
        specialty="slender reinforced concrete column design using the Moment Magnification Method",
        instructions="""6.  **calculationSteps**: Critical steps include the slenderness ratio (kl/r) check, the critical buckling load (Pc), the moment magnification factor, the magnified moment (Mc), and the final design check.
7.  **pmInteractionData**: Provide at least 10 points (p in kN, m in kNm) of the nominal capacity curve from pure compression through the balanced point to near pure bending, plus the factored demand point.
8.  **drawingSpec**: Generate a drawing specification of the column cross-section.""",
        required_inputs=("column dimensions", "unbraced length", "axial load and moments", "material"),
        extra_properties={
            "pmInteractionData": obj(
                {"capacityCurve": array(obj({"p": NUMBER, "m": NUMBER})), "demandPoint": obj({"p": NUMBER, "m": NUMBER})}
            ),
            "drawingSpec": SECTION_DRAWING,
        },
    ),
    structural_specialist(
        key="two_way_slab_design",
        name="Two-Way Slab Design (DDM)",
        calculation_type="TWO_WAY_SLAB_DESIGN",
        specialty="two-way concrete slab design using the Direct Design Method (DDM)",
        instructions="""6.  **calculationSteps**: Critical steps include checking the DDM limitations, the minimum slab thickness (h_min), the total factored static moment (Mo), its distribution into positive and negative moments and into column and middle strips, and the reinforcement for all strips.
7.  **conclusion**: Summarize the required reinforcement (e.g., "Top bars in column strip: D13 @ 200 mm").""",
        required_inputs=("panel dimensions", "slab thickness", "loads", "material"),
        extra_properties={"slabType": enum("ONE_WAY", "TWO_WAY_DDM", "FLAT_PLATE_PUNCHING_SHEAR")},
        extra_required=["slabType"],
        request_suffix=' It MUST also include "slabType": "TWO_WAY_DDM".',
    ),
    structural_specialist(
        key="punching_shear_design",
        name="Punching Shear Design",
        calculation_type="PUNCHING_SHEAR_DESIGN",
        specialty="punching shear design for flat plate concrete slabs",
        instructions="""6.  **calculationSteps**: Critical steps include the critical shear perimeter (b0), the factored shear stress (vu), the concrete punching shear capacity (vc) and, if vu > phi*vc, the shear reinforcement.
7.  **verifications**: The main verification compares vu against phi*vc. Also check the maximum shear stress with reinforcement.""",
        required_inputs=("slab thickness", "column size", "factored shear load", "concrete strength"),
    ),
    structural_specialist(
        key="retaining_wall_design",
        name="Cantilever Retaining Wall Design",
        calculation_type="RETAINING_WALL_DESIGN",
        specialty="cantilever retaining wall design (stability and structural design)",
        instructions="""6.  **Geotechnical Analysis**: First calculate active and passive earth pressures and check Overturning, Sliding and Bearing Capacity, showing the Factor of Safety for each mode.
7.  **Structural Design**: Then design flexural reinforcement for the Stem, the Heel and the Toe.
8.  **verifications**: Contain the stability checks (Overturning FoS, Sliding FoS, etc.).""",
        required_inputs=("wall height", "soil properties", "surcharge", "material"),
        extra_properties={"drawingSpec": SECTION_DRAWING},
    ),
    structural_specialist(
        key="steel_connection_design",
        name="Steel Shear Connection Design",
        calculation_type="STEEL_CONNECTION_DESIGN",
        specialty="steel connection design (e.g., AISC 360)",
        instructions="""6.  **verifications**: THIS IS THE MOST CRITICAL PART. Check every relevant limit state of a shear tab: Bolt Shear Rupture, Bolt Bearing/Tearout on Beam Web and on Plate, Gross Yielding of Plate, Net Rupture of Plate, Block Shear Rupture of Plate and of Beam Web. Give each evaluation as a single LaTeX comparison, e.g. '$$ \\phi R_n = 350 \\text{ kN} > R_u = 200 \\text{ kN} $$'.
7.  **conclusion**: State the controlling limit state and the overall connection capacity.""",
        required_inputs=("design shear load", "beam and column/girder sizes", "bolt details"),
        extra_properties={"connectionType": enum("SHEAR_TAB", "FLANGE_PLATE_MOMENT", "WELDED")},
        extra_required=["connectionType"],
        preflight=Preflight(
            needed="like shear load, member sizes, bolt diameter, bolt grade, material strengths",
            missing=(
                "The design shear load (e.g., 250 kN)",
                "The beam and column/girder sizes (e.g., W18x50 into a W24x94)",
                "The bolt details (e.g., number, diameter, and grade)",
            ),
        ),
        request_suffix=' It MUST also include "connectionType": "SHEAR_TAB".',
    ),
    structural_specialist(
        key="welded_connection_design",
        name="Welded Connection Design",
        calculation_type="WELDED_CONNECTION_DESIGN",
        specialty="steel welded connection design (e.g., AISC 360)",
        instructions="""6.  **calculationSteps**: Calculate the required weld size from the applied force and material strengths, then the required weld length.
7.  **verifications**: Check weld metal strength, base metal shear strength (yielding and rupture), and minimum and maximum weld sizes.
8.  **conclusion**: State the required weld size and length/configuration.""",
        required_inputs=("applied force", "connected plate thicknesses", "electrode and steel grades"),
        preflight=Preflight(
            needed="like applied force, plate thicknesses, electrode strength, steel grade",
            missing=(
                "The applied design force (e.g., 300 kN)",
                "The connected plate thicknesses",
                "The electrode and base metal grades (e.g., E70XX, A36)",
            ),
        ),
    ),
    structural_specialist(
        key="column_base_plate_design",
        name="Column Base Plate Design",
        calculation_type="COLUMN_BASE_PLATE_DESIGN",
        specialty="steel column base plate design (e.g., AISC Design Guide 1)",
        instructions="""6.  **calculationSteps**: Determine the required bearing area from the concrete strength, select plate dimensions (N and B), calculate the required plate thickness (tp), and check anchor bolts if uplift or high shear is specified.
7.  **conclusion**: State the base plate dimensions (N x B x tp) and any anchor bolt requirements.""",
        required_inputs=("column section", "factored axial load", "concrete and plate strengths"),
        preflight=Preflight(
            needed="like factored axial load, column section, concrete strength, plate yield strength",
            missing=(
                "The factored axial load (e.g., 1500 kN)",
                "The column section (e.g., W10x49)",
                "The concrete and plate strengths (e.g., f'c = 28 MPa, Fy = 250 MPa)",
            ),
        ),
    ),
    structural_specialist(
        key="composite_beam_design",
        name="Composite Beam Design",
        calculation_type="COMPOSITE_BEAM_DESIGN",
        specialty="composite steel-concrete beam design",
        instructions="""6.  **calculationSteps**: Determine the effective slab width, the plastic neutral axis location, the nominal flexural strength, the required number of shear studs, and the construction-stage (non-composite) check.
7.  **verifications**: Include flexure, shear, stud capacity and deflection checks.""",
        required_inputs=("span", "loads", "steel section", "slab thickness and concrete strength"),
    ),
    structural_specialist(
        key="seismic_load_analysis",
        name="Seismic Load Analysis (ELF)",
        calculation_type="SEISMIC_LOAD_ANALYSIS",
        specialty="seismic load analysis using the Equivalent Lateral Force (ELF) procedure",
        instructions="""6.  **calculationSteps**: Determine the seismic parameters (Ss, S1, Site Class), SDS and SD1, the fundamental period (T), the response coefficient (Cs), the base shear (V) and its vertical distribution (Fx).
7.  **conclusion**: Summarize the base shear and the lateral forces at each floor; the 'finalAnswer' is the total base shear.""",
        required_inputs=("building height and storeys", "seismic weight", "site parameters"),
    ),
    structural_specialist(
        key="wind_load_analysis",
        name="Wind Load Analysis",
        calculation_type="WIND_LOAD_ANALYSIS",
        specialty="wind load analysis for buildings using the Directional Procedure",
        instructions="""6.  **calculationSteps**: Determine the wind parameters (V, Risk and Exposure Category, Kzt, Kd), Kz, the velocity pressure (qz), the gust-effect factor (G), the pressure coefficients (Cp) and the design pressures for each surface.
7.  **conclusion**: Summarize the design wind pressures for all building surfaces.""",
        required_inputs=("building dimensions", "basic wind speed", "exposure category"),
    ),
]
