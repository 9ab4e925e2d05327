"""Output model builders for specialist generation

Specialist output is declared as pydantic models assembled with
`create_model`. Properties are keyed in the camelCase used on the wire; the
model's `model_json_schema()` is sent as `response_schema` and replies are
parsed with `model_validate_json()`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic.alias_generators import to_snake
from typing_extensions import Annotated

STRING = str
NUMBER = float
BOOLEAN = bool


class OutputModel(BaseModel):
    """Base of the generated output models"""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """camelCase dict without the optional properties the model left out"""
        return self.model_dump(by_alias=True, exclude_none=True)


def string(description: str | None = None, min_length: int | None = None) -> Any:
    if min_length is None:
        return Annotated[str, Field(description=description)]
    return Annotated[str, Field(description=description, min_length=min_length)]


def enum(*values: str, description: str | None = None) -> Any:
    values = tuple(v.value if isinstance(v, Enum) else v for v in values)
    return Annotated[Literal[values], Field(description=description)]


def array(items: Any, description: str | None = None) -> Any:
    return Annotated[List[items], Field(description=description)]


def obj(
    properties: dict,
    required: list[str] | None = None,
    description: str | None = None,
    name: str = "Object",
) -> type[OutputModel]:
    """Output model; every property is required unless `required` is given

    Properties left out of `required` are optional and default to None.
    """
    required = set(properties) if required is None else set(required)
    fields: dict[str, Any] = {}
    for key, annotation in properties.items():
        if key in required:
            fields[to_snake(key)] = (annotation, Field(alias=key))
        else:
            fields[to_snake(key)] = (Optional[annotation], Field(default=None, alias=key))
    return create_model(name, __base__=OutputModel, __doc__=description, **fields)


def _model_name(tag: str) -> str:
    return "".join(part.capitalize() for part in str(tag).lower().split("_")) + "Output"


STRING_LIST = array(STRING)

POINT = obj({"x": NUMBER, "y": NUMBER}, name="Point")


# =============================================================================
# Calculation output
# =============================================================================

def calculation_step(theory: bool = False) -> type[OutputModel]:
    """One derivation step

    Structural steps cite a clause of the governing standard; geotechnical
    steps cite a theory or method and may add a standard clause.
    """
    properties = {
        "title": string("Title of the step, e.g. 'Calculate Effective Depth (d)'."),
        "formula": string("Formula used for this step, as a LaTeX string."),
        "derivationSteps": array(STRING, "Derivation lines; prose and LaTeX math in separate entries."),
    }
    if not theory:
        properties["standardReference"] = string(
            "EXACT clause, article or table of the governing standard for this step.", min_length=1
        )
        return obj(properties, name="CalculationStep")

    properties["theoryReference"] = string("Theory or method reference for this step.", min_length=1)
    properties["standardReference"] = string("Clause of a standard, when one applies to this step.")
    return obj(properties, required=["title", "formula", "derivationSteps", "theoryReference"], name="TheoryStep")


CALCULATION_STEP = calculation_step()
THEORY_STEP = calculation_step(theory=True)

VERIFICATION = obj(
    {
        "checkName": string("Name of the check, e.g. 'Minimum Reinforcement (As_min)'."),
        "evaluation": string("Result of the check, formatted in LaTeX."),
        "status": enum("OK", "FAIL", "WARNING"),
        "standardReference": string("EXACT clause or table of the standard for this check.", min_length=1),
    },
    name="Verification",
)

CONCLUSION = obj(
    {
        "summary": string("Summary of the calculation results."),
        "finalAnswer": obj(
            {
                "name": string("Name of the final answer, e.g. 'Required Reinforcement'."),
                "value": string("Value of the final answer, e.g. '3-D22 Bars'."),
                "unit": string("Unit of the final answer, e.g. 'mm^2'."),
            },
            name="FinalAnswer",
        ),
    },
    name="Conclusion",
)

SOIL_PROFILE = obj(
    {
        "layers": array(
            obj(
                {
                    "depthTop": NUMBER,
                    "depthBottom": NUMBER,
                    "description": STRING,
                    "unitWeight": NUMBER,
                    "cohesion": NUMBER,
                    "frictionAngle": NUMBER,
                },
                required=["depthTop", "depthBottom", "description", "unitWeight"],
                name="SoilLayer",
            )
        ),
        "waterTableDepth": NUMBER,
    },
    name="SoilProfile",
)


def calculation_model(
    calculation_type: str,
    extra_properties: dict | None = None,
    extra_required: list[str] | None = None,
    geotechnical: bool = False,
) -> type[OutputModel]:
    """Output model of a structural or geotechnical calculation

    Args:
        calculation_type: value of the `calculationType` tag
        extra_properties: task-specific properties (diagram data, drawing specs, ...)
        extra_required: which of the extra properties are required
        geotechnical: use governingTheory/soilProfile/theoryReference instead of governingStandard
    """
    properties: dict[str, Any] = {"calculationType": enum(calculation_type)}
    if geotechnical:
        properties["governingTheory"] = string("Governing theory, e.g. 'Terzaghi's Bearing Capacity Theory'.")
    else:
        properties["governingStandard"] = string(
            "Full name of the standard used, e.g. 'SNI 2847:2019 (Indonesia)'."
        )
    properties.update(
        {
            "problemStatement": string("Concise summary of the user's request."),
            "assumptions": array(STRING, "Engineering assumptions as 'Parameter: Value Unit'."),
            "givenData": array(STRING, "User-provided data as 'Parameter: Value Unit'."),
            "calculationSteps": array(THEORY_STEP if geotechnical else CALCULATION_STEP),
            "verifications": array(VERIFICATION),
            "conclusion": CONCLUSION,
            "recommendations": STRING_LIST,
            "warnings": STRING_LIST,
        }
    )
    if geotechnical:
        properties["soilProfile"] = SOIL_PROFILE

    required = [name for name in properties if name not in ("recommendations", "warnings")]
    if extra_properties:
        properties.update(extra_properties)
        required.extend(extra_required or [])
    return obj(properties, required=required, name=_model_name(calculation_type))


# =============================================================================
# Document output
# =============================================================================

def document_model(result_type: str, fields: dict) -> type[OutputModel]:
    """Output model of a generated document: `resultType` tag plus the document fields"""
    properties = {"resultType": enum(result_type)}
    properties.update(fields)
    return obj(properties, name=_model_name(getattr(result_type, "value", result_type)))
