"""Unit tests for inpaint_core/prompts.py."""

import pytest
from inpaint_core.guide import GuideMode
from inpaint_core.prompts import build_inpaint_prompt, quote_text


class TestBuildPrompt:

    def test_visual_prompt_names_both_inputs(self):
        prompt = build_inpaint_prompt("SALE 50%")
        assert "[Source Image]" in prompt
        assert "[Location Guide]" in prompt
        assert "GREEN" in prompt
        assert 'replace the existing text with: "SALE 50%"' in prompt

    def test_mask_prompt(self):
        prompt = build_inpaint_prompt("Hello", GuideMode.MASK)
        assert "[Edit Mask]" in prompt
        assert "WHITE" in prompt
        assert '"Hello"' in prompt

    def test_text_is_stripped(self):
        assert '"Open"' in build_inpaint_prompt("  Open \n")

    def test_quotes_escaped(self):
        assert quote_text('say "hi"') == 'say \\"hi\\"'

    def test_blank_text_rejected(self):
        with pytest.raises(ValueError, match="must not be empty"):
            build_inpaint_prompt("   ")
