"""
Tests for the interactive wizard with scripted prompt answers.
"""

import io
from unittest.mock import patch

from rich.console import Console

from aem_generator.interactive import InteractiveWizard
from aem_generator.session import FormChangeDebouncer, GenerationSession, SessionStep

IDENTITY = ["Call To Action", "com.example.aem.core", "calltoaction"]
BUTTON_FIELDS = ["Buy Now", "/content/x", "primary", "medium"]


def _wizard(config, **kwargs):
    console = Console(file=io.StringIO(), width=200, color_system=None)
    return InteractiveWizard(config, console=console, **kwargs)


def _output(wizard):
    return wizard.console.file.getvalue()


class TestInteractiveWizard:
    """Tests for InteractiveWizard.run()."""

    def test_preview_then_quit(self, config):
        wizard = _wizard(config)
        answers = ["3", *IDENTITY, *BUTTON_FIELDS, "p", "q"]

        with patch("aem_generator.interactive.Prompt.ask", side_effect=answers):
            assert wizard.run() is True

        assert wizard.session.step == SessionStep.GENERATION
        assert wizard.session.component_type == "button-component"
        assert wizard.session.result.success
        assert "call-to-action.html" in _output(wizard)
        assert "Generation Metadata" in _output(wizard)

    def test_generate_writes_files(self, config, tmp_path):
        wizard = _wizard(config)
        out = tmp_path / "cta"
        answers = ["3", *IDENTITY, *BUTTON_FIELDS, "g", str(out), "q"]

        with patch("aem_generator.interactive.Prompt.ask", side_effect=answers):
            assert wizard.run() is True

        assert (out / "CallToActionModel.java").is_file()
        assert (out / "_cq_dialog" / ".content.xml").is_file()

    def test_existing_directory_is_not_overwritten_without_confirmation(
        self, config, tmp_path
    ):
        wizard = _wizard(config)
        answers = ["3", *IDENTITY, *BUTTON_FIELDS, "g", str(tmp_path), "q"]

        with patch("aem_generator.interactive.Prompt.ask", side_effect=answers), patch(
            "aem_generator.interactive.Confirm.ask", return_value=False
        ):
            assert wizard.run() is True

        assert not (tmp_path / "README.md").exists()
        assert "Nothing written" in _output(wizard)

    def test_refused_request_stays_on_configuration(self, config):
        """Test that a blank required field keeps the wizard on the form."""
        wizard = _wizard(config)
        answers = ["3", *IDENTITY, "", "/content/x", "primary", "medium", "p", "q"]
        # after the refusal the form is asked again; quit from the action prompt
        answers += [*IDENTITY, *BUTTON_FIELDS, "q"]

        with patch("aem_generator.interactive.Prompt.ask", side_effect=answers):
            assert wizard.run() is True

        assert wizard.session.step == SessionStep.CONFIGURATION
        assert "Button Text is required" in _output(wizard)

    def test_back_to_selection(self, config):
        wizard = _wizard(config)
        answers = ["3", *IDENTITY, *BUTTON_FIELDS, "b", "q"]

        with patch("aem_generator.interactive.Prompt.ask", side_effect=answers):
            assert wizard.run() is True

        assert wizard.session.step == SessionStep.SELECTION
        assert wizard.session.component_type is None

    def test_quit_at_selection(self, config):
        wizard = _wizard(config)
        with patch("aem_generator.interactive.Prompt.ask", return_value="q"):
            assert wizard.run() is True
        assert wizard.session.step == SessionStep.SELECTION

    def test_keyboard_interrupt(self, config):
        wizard = _wizard(config)
        with patch("aem_generator.interactive.Prompt.ask", side_effect=KeyboardInterrupt):
            assert wizard.run() is False
        assert "cancelled" in _output(wizard)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestFieldDebouncing:
    """Tests for how field answers reach the session."""

    def _run(self, config, answers, clock, slow=()):
        """Run the wizard; answering a prompt in ``slow`` takes the author a second."""
        queue = list(answers)

        def ask(*args, **kwargs):
            answer = queue.pop(0)
            if answer in slow:
                clock.now += 1.0
            return answer

        wizard = _wizard(config, debouncer=FormChangeDebouncer(300, clock=clock))
        with patch("aem_generator.interactive.Prompt.ask", side_effect=ask), patch.object(
            GenerationSession,
            "update_values",
            autospec=True,
            side_effect=GenerationSession.update_values,
        ) as update_values:
            assert wizard.run() is True
        return wizard, [c.args[1] for c in update_values.call_args_list]

    def test_quick_answers_arrive_as_one_update(self, config):
        answers = ["3", *IDENTITY, *BUTTON_FIELDS, "q"]
        wizard, updates = self._run(config, answers, FakeClock())

        assert updates == [
            {"text": "Buy Now", "url": "/content/x", "style": "primary", "size": "medium"}
        ]
        assert dict(wizard.session.form_values) == updates[0]

    def test_pause_applies_settled_answers(self, config):
        """Test that answers settle while the author takes time on the next field."""
        answers = ["3", *IDENTITY, *BUTTON_FIELDS, "q"]
        wizard, updates = self._run(config, answers, FakeClock(), slow={"/content/x"})

        assert updates == [
            {"text": "Buy Now"},
            {"text": "Buy Now", "url": "/content/x", "style": "primary", "size": "medium"},
        ]
        assert wizard.session.form_values["size"] == "medium"

    def test_wait_comes_from_config(self, config):
        config.debounce_ms = 50
        assert _wizard(config).debouncer.wait == 0.05
