"""Specialist tables and generator contract tests"""

import json

import pytest
from pydantic import ValidationError

from flocore.errors import GenerationFailure
from flocore.models import CalculationResult, DocumentResult, DocumentType
from flocore.services.llm.dummy_llm import sample_from_schema
from flocore.services.specialists import geotechnical, hse, quality, site_manager, structural
from flocore.services.specialists.schemas import (
    CALCULATION_STEP,
    NUMBER,
    STRING,
    THEORY_STEP,
    array,
    calculation_model,
    document_model,
    enum,
    obj,
)

DOMAINS = [structural, geotechnical, site_manager, hse, quality]


def by_key(module, key):
    return next(s for s in module.SPECIALISTS if s.key == key)


class TestTaskTables:
    @pytest.mark.parametrize("module", DOMAINS, ids=lambda m: m.DOMAIN)
    def test_one_specialist_per_task(self, module):
        keys = [s.key for s in module.SPECIALISTS]

        assert len(keys) == len(set(keys))
        assert set(keys) == set(module.TASKS)

    def test_task_counts(self):
        assert [len(m.TASKS) for m in DOMAINS] == [11, 4, 14, 14, 13]

    def test_documents_cover_document_type(self):
        result_types = {
            s.result_tag for m in (site_manager, hse, quality) for s in m.SPECIALISTS
        }

        assert result_types == {t.value for t in DocumentType}

    def test_display_names(self):
        assert by_key(structural, "reinforced_concrete_beam_design").name == "Reinforced Concrete Beam Design"
        assert by_key(site_manager, "daily_site_report").name == "Daily Site Report"
        assert by_key(hse, "accident_report").result_tag == "HSE_ACCIDENT_REPORT"
        assert by_key(quality, "inspection_test_plan").name == "Inspection and Test Plan (ITP)"

    def test_preflights(self):
        with_preflight = {s.key for s in structural.SPECIALISTS if s.preflight is not None}

        assert with_preflight == {
            "steel_connection_design",
            "welded_connection_design",
            "column_base_plate_design",
        }

    def test_beam_required_inputs(self):
        assert by_key(structural, "reinforced_concrete_beam_design").required_inputs == (
            "span",
            "loads",
            "material",
        )


class TestOutputModels:
    def test_calculation_model_structural(self):
        schema = calculation_model("REINFORCED_BEAM_DESIGN").model_json_schema()

        assert schema["properties"]["calculationType"]["const"] == "REINFORCED_BEAM_DESIGN"
        assert "governingStandard" in schema["required"]
        assert "recommendations" not in schema["required"]

    def test_calculation_model_geotechnical(self):
        schema = calculation_model("SLOPE_STABILITY_ANALYSIS", geotechnical=True).model_json_schema()

        assert "governingTheory" in schema["required"]
        assert "soilProfile" in schema["required"]
        assert "governingStandard" not in schema["properties"]

    def test_extra_properties_optional_unless_listed(self):
        schema = calculation_model("X", {"a": STRING, "b": NUMBER}, extra_required=["b"]).model_json_schema()

        assert "a" not in schema["required"]
        assert "b" in schema["required"]

    def test_document_model(self):
        schema = document_model(DocumentType.DAILY_SITE_REPORT, {"reportDate": STRING}).model_json_schema()

        assert schema["required"] == ["resultType", "reportDate"]
        assert schema["properties"]["resultType"]["const"] == "DAILY_SITE_REPORT"

    def test_step_references_required(self):
        structural_step = CALCULATION_STEP.model_json_schema()
        theory_step = THEORY_STEP.model_json_schema()

        assert structural_step["properties"]["standardReference"]["minLength"] == 1
        assert "standardReference" in structural_step["required"]
        assert theory_step["properties"]["theoryReference"]["minLength"] == 1
        assert "standardReference" not in theory_step["required"]

    def test_missing_and_null(self):
        model = obj({"a": STRING, "b": STRING})

        with pytest.raises(ValidationError) as exc:
            model.model_validate_json('{"a": "x", "b": null}')

        assert [e["loc"] for e in exc.value.errors()] == [("b",)]

    def test_nested_enum(self):
        model = obj({"items": array(obj({"status": enum("Pass", "Fail")}))})

        with pytest.raises(ValidationError) as exc:
            model.model_validate_json('{"items": [{"status": "Pass"}, {"status": "Maybe"}]}')

        assert [e["loc"] for e in exc.value.errors()] == [("items", 1, "status")]

    def test_types(self):
        model = obj({"n": NUMBER, "s": STRING})

        with pytest.raises(ValidationError) as exc:
            model.model_validate_json('{"n": "many", "s": 3}')

        assert {e["loc"] for e in exc.value.errors()} == {("n",), ("s",)}

    def test_to_wire_uses_camel_case(self):
        model = obj({"checkName": STRING, "note": STRING}, required=["checkName"])

        output = model.model_validate_json('{"checkName": "As_min"}')

        assert output.check_name == "As_min"
        assert output.to_wire() == {"checkName": "As_min"}


class TestSpecialistGeneration:
    def test_calculation_with_dummy(self, dummy_llm_service):
        specialist = by_key(structural, "reinforced_concrete_beam_design")

        result = specialist.calculate(dummy_llm_service, "Design a 6 m beam, 20 kN/m, f'c 28 MPa")

        assert isinstance(result, CalculationResult)
        assert result.model_extra["calculationType"] == "REINFORCED_BEAM_DESIGN"
        assert "drawingSpec" in result.model_extra

    def test_geotechnical_with_dummy(self, dummy_llm_service):
        result = by_key(geotechnical, "slope_stability").calculate(dummy_llm_service, "slope 2H:1V")

        assert result.governing_theory
        assert result.governing_standard is None

    @pytest.mark.parametrize("module", [site_manager, hse, quality], ids=lambda m: m.DOMAIN)
    def test_every_document_with_dummy(self, module, dummy_llm_service):
        for specialist in module.SPECIALISTS:
            result = specialist.calculate(dummy_llm_service, f"create a {specialist.name}")

            assert isinstance(result, DocumentResult)
            assert result.result_type.value == specialist.result_tag

    def test_request_uses_schema_and_standard(self, scripted_llm):
        specialist = by_key(structural, "punching_shear_design")
        llm = scripted_llm(sample_from_schema(specialist.schema))

        specialist.calculate(llm, "check punching", standard="SNI 2847:2019 (Indonesia)")

        messages = llm.generate.call_args.args[0]
        kwargs = llm.generate.call_args.kwargs
        assert kwargs["response_schema"] is specialist.schema
        assert kwargs["temperature"] == specialist.temperature
        assert "SNI 2847:2019 (Indonesia)" in messages[0].content
        assert '"calculationType": "PUNCHING_SHEAR_DESIGN"' in messages[1].content

    def test_document_rubric_context(self, scripted_llm):
        specialist = by_key(site_manager, "daily_site_report")
        llm = scripted_llm(sample_from_schema(specialist.schema))

        specialist.calculate(llm, "daily report", user_name="Budi", project_context="Weather: Rain")

        system = llm.generate.call_args.args[0][0].content
        assert "prepared by Budi" in system
        assert "Weather: Rain" in system

    def test_empty_response(self, scripted_llm):
        specialist = by_key(structural, "wind_load_analysis")

        with pytest.raises(GenerationFailure) as exc:
            specialist.calculate(scripted_llm("   "), "wind")

        assert exc.value.specialist == "Wind Load Analysis"
        assert exc.value.raw_text is None

    def test_invalid_json_keeps_raw_text(self, scripted_llm):
        specialist = by_key(structural, "wind_load_analysis")

        with pytest.raises(GenerationFailure) as exc:
            specialist.calculate(scripted_llm("Sure! Here is your calc"), "wind")

        assert exc.value.raw_text == "Sure! Here is your calc"

    def test_missing_required_field(self, scripted_llm):
        specialist = by_key(structural, "wind_load_analysis")
        data = sample_from_schema(specialist.schema)
        del data["conclusion"]

        with pytest.raises(GenerationFailure) as exc:
            specialist.calculate(scripted_llm(data), "wind")

        assert "conclusion" in exc.value.reason
        assert json.loads(exc.value.raw_text) == data

    def test_transport_error(self, scripted_llm):
        specialist = by_key(geotechnical, "deep_foundation")

        with pytest.raises(GenerationFailure) as exc:
            specialist.calculate(scripted_llm(TimeoutError("deadline exceeded")), "pile")

        assert "deadline exceeded" in exc.value.reason

    def test_empty_step_reference_rejected(self, scripted_llm):
        specialist = by_key(structural, "reinforced_concrete_beam_design")
        data = sample_from_schema(specialist.schema)
        for step in data["calculationSteps"] + data["shearCalculationSteps"]:
            step["standardReference"] = ""

        with pytest.raises(GenerationFailure) as exc:
            specialist.calculate(scripted_llm(data), "Design a 6 m beam")

        assert "calculationSteps.0.standardReference" in exc.value.reason

    def test_empty_theory_reference_rejected(self, scripted_llm):
        specialist = by_key(geotechnical, "slope_stability")
        data = sample_from_schema(specialist.schema)
        data["calculationSteps"][0]["theoryReference"] = ""

        with pytest.raises(GenerationFailure) as exc:
            specialist.calculate(scripted_llm(data), "slope 2H:1V")

        assert "theoryReference" in exc.value.reason

    def test_geotechnical_step_without_standard_clause(self, scripted_llm):
        specialist = by_key(geotechnical, "slope_stability")
        data = sample_from_schema(specialist.schema)
        del data["calculationSteps"][0]["standardReference"]

        result = specialist.calculate(scripted_llm(data), "slope 2H:1V")

        assert result.calculation_steps[0].theory_reference == "N/A (dummy)"
        assert result.calculation_steps[0].standard_reference is None
