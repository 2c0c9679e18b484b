from pathlib import Path

import pytest
from pydantic import ValidationError

from core.form_filler import FillPlan, FillStep, PlanReport, StepOutcome

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class TestFillStep:

    def test_label_prefers_name(self):
        step = FillStep(action="fill", name="agency_name", selector="#input_1_116", value="x")
        assert step.label == "agency_name"

    def test_label_falls_back_to_field_then_selector(self):
        assert FillStep(action="select_option", field="Do you have an Agent?", option="Yes").label == "Do you have an Agent?"
        assert FillStep(action="click", selector="#next").label == "#next"

    @pytest.mark.parametrize(
        "data, missing",
        [
            ({"action": "select_dropdown", "field": "How did you hear about us?"}, "option"),
            ({"action": "fill", "selector": "#input_1_116"}, "value"),
            ({"action": "force_fill", "value": "x"}, "selector"),
            ({"action": "ensure_revealed"}, "selector"),
        ],
    )
    def test_required_fields_per_action(self, data, missing):
        with pytest.raises(ValidationError, match=missing):
            FillStep(**data)

    def test_unknown_action(self):
        with pytest.raises(ValidationError):
            FillStep(action="hover", selector="#x")

    def test_negative_timeout(self):
        with pytest.raises(ValidationError):
            FillStep(action="click", selector="#x", timeout_ms=-1)


class TestFillPlan:

    def test_from_yaml(self, tmp_path: Path):
        plan_file = tmp_path / "plan.yaml"
        plan_file.write_text(
            "url: https://example.com/enrol\n"
            "steps:\n"
            "  - action: select_option\n"
            "    field: Do you have an Agent?\n"
            '    option: "Yes"\n'
            "  - action: force_fill\n"
            '    selector: "#input_1_593"\n'
            "    value: agent@example.com\n"
            "    timeout_ms: 5000\n",
            encoding="utf-8",
        )

        plan = FillPlan.from_yaml(plan_file)

        assert plan.url == "https://example.com/enrol"
        assert [step.action for step in plan.steps] == ["select_option", "force_fill"]
        assert plan.steps[0].option == "Yes"
        assert plan.steps[1].timeout_ms == 5000

    def test_empty_file(self, tmp_path: Path):
        plan_file = tmp_path / "empty.yaml"
        plan_file.write_text("", encoding="utf-8")

        plan = FillPlan.from_yaml(plan_file)

        assert plan.url is None
        assert plan.steps == []

    def test_shipped_enrolment_plan_is_valid(self):
        plan = FillPlan.from_yaml(PROJECT_ROOT / "config" / "enrolment_plan.yaml")

        assert plan.url.startswith("https://")
        assert plan.steps[-1].action == "click"


def test_plan_report_partitions_outcomes():
    ok = StepOutcome(step=FillStep(action="click", selector="#a"), succeeded=True)
    bad = StepOutcome(step=FillStep(action="click", selector="#b"), succeeded=False, error="x")

    report = PlanReport(outcomes=[ok, bad])

    assert report.succeeded == [ok]
    assert report.failed == [bad]
    assert not report.completed
    assert PlanReport().completed


class TestPlanWaitUntil:

    def test_defaults_to_none(self):
        assert FillPlan().wait_until is None

    def test_reads_wait_until_from_yaml(self, tmp_path: Path):
        plan_file = tmp_path / "plan.yaml"
        plan_file.write_text("url: https://example.com/enrol\nwait_until: networkidle\nsteps: []\n", encoding="utf-8")

        assert FillPlan.from_yaml(plan_file).wait_until == "networkidle"

    def test_rejects_unknown_load_state(self):
        with pytest.raises(ValidationError):
            FillPlan(wait_until="interactive")
