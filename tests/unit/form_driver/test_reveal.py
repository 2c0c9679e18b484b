import pytest

from form_driver.adapters.memory import MemoryDocument, inline_style
from form_driver.errors import WaitTimeoutError
from form_driver.models import WaitPolicy
from form_driver.reveal import ensure_revealed


def show_agent_block(doc: MemoryDocument) -> None:
    """Stand-in for gform.applyConditions once the agent answer is "Yes"."""
    block = doc.element("#field_1_593")
    block["class"].remove("gform_hidden")
    del block["style"]


class TestEnsureRevealed:

    @pytest.mark.asyncio
    async def test_host_conditions_reveal_without_stripping(self, enrolment_html, fast_policy):
        doc = MemoryDocument.from_html(enrolment_html, reapply_conditions=show_agent_block)

        await ensure_revealed(doc, "#field_1_593", fast_policy, input_selector="#input_1_593")

        assert doc.reapply_calls == 1
        # Stripping would have re-enabled the input
        assert doc.element("#input_1_593").has_attr("disabled")

    @pytest.mark.asyncio
    async def test_strips_hidden_state_without_host_conditions(self, document: MemoryDocument, fast_policy):
        await ensure_revealed(document, "#field_1_593", fast_policy, input_selector="#input_1_593")

        block = document.element("#field_1_593")
        element = document.element("#input_1_593")
        assert "gform_hidden" not in block["class"]
        assert "display" not in inline_style(block)
        assert not element.has_attr("disabled")
        assert "readonly" not in document.element("#input_1_593_2").attrs
        assert await document.has_layout(element)

    @pytest.mark.asyncio
    async def test_strips_when_host_conditions_leave_block_hidden(self, enrolment_html, fast_policy):
        doc = MemoryDocument.from_html(enrolment_html, reapply_conditions=lambda _doc: None)

        await ensure_revealed(doc, "#field_1_593", fast_policy)

        assert doc.reapply_calls == 1
        assert not doc.element("#input_1_593").has_attr("disabled")

    @pytest.mark.asyncio
    async def test_does_not_touch_other_blocks(self, document: MemoryDocument, fast_policy):
        await ensure_revealed(document, "#field_1_593", fast_policy)

        assert inline_style(document.element("#field_1_78"))["display"] == ("none", False)

    @pytest.mark.asyncio
    async def test_times_out_when_stylesheet_keeps_block_hidden(self, enrolment_html):
        doc = MemoryDocument.from_html(
            enrolment_html,
            stylesheet={"#field_1_593": {"display": "none"}},
            reapply_conditions=lambda _doc: None,
        )
        policy = WaitPolicy(timeout_ms=100, poll_interval_ms=20)

        with pytest.raises(WaitTimeoutError, match="#field_1_593"):
            await ensure_revealed(doc, "#field_1_593", policy)

        assert doc.reapply_calls > 1

    @pytest.mark.asyncio
    async def test_times_out_when_block_missing(self, document: MemoryDocument):
        policy = WaitPolicy(timeout_ms=50, poll_interval_ms=10)

        with pytest.raises(WaitTimeoutError):
            await ensure_revealed(document, "#field_1_999", policy)

    @pytest.mark.asyncio
    async def test_accepts_combinators_and_pseudo_classes(self, document: MemoryDocument, fast_policy):
        await ensure_revealed(
            document, "form > #field_1_593", fast_policy, input_selector="input:not([readonly])"
        )

        assert await document.has_layout(document.element("#input_1_593"))
        assert await document.has_layout(document.element("#input_1_593_2"))
