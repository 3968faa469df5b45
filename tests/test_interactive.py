"""
Tests for the interactive menu (springwell/interactive.py).

Prompts are patched so the menu loop runs without a terminal.

Run: pytest tests/test_interactive.py -v
"""

from unittest.mock import MagicMock, patch

from springwell.cli import CLIHandler
from springwell.interactive import InteractiveHandler


def _handler(project_dir, output):
    return InteractiveHandler(CLIHandler(output, project_dir, console=MagicMock()))


def test_exit_immediately(tmp_path, output):
    with patch("springwell.interactive.Prompt.ask", return_value="0"):
        assert _handler(tmp_path, output).run() == 0
    assert output.of_level("info") == ["Exiting SpringWell CLI. Goodbye!"]


def test_error_reported_and_loop_continues(tmp_path, output):
    # Generate components outside a project, then exit.
    with patch("springwell.interactive.Prompt.ask", side_effect=["2", "0"]):
        assert _handler(tmp_path, output).run() == 0
    assert output.of_level("error") == ["Current directory is not a Spring Boot project"]


def test_generate_entity_from_menu(spring_project, output):
    answers = ["2", "1", "Product", "name:String price:BigDecimal", "", "0"]
    with patch("springwell.interactive.Prompt.ask", side_effect=answers), patch(
        "springwell.interactive.Confirm.ask", return_value=True
    ):
        _handler(spring_project, output).run()

    entity = (
        spring_project
        / "src/main/java/com/example/service/domain/entity/Product.java"
    )
    assert "private BigDecimal price;" in entity.read_text(encoding="utf-8")
    assert not output.of_level("error")


def test_generate_component_from_menu(spring_project, output):
    answers = ["2", "7", "Notify", "0"]
    with patch("springwell.interactive.Prompt.ask", side_effect=answers):
        _handler(spring_project, output).run()
    assert (
        spring_project / "src/main/java/com/example/service/temporal/activity/NotifyActivity.java"
    ).exists()


def test_new_project_from_menu(tmp_path, output):
    handler = _handler(tmp_path, output)
    answers = ["1", "orders", "", "2", "3", "0"]
    with patch("springwell.interactive.Prompt.ask", side_effect=answers), patch.object(
        handler.handler, "new_project"
    ) as new_project:
        handler.run()
    options = new_project.call_args.args[0]
    assert (options.name, options.template, options.db) == ("orders", "aws-temporal-auth0", "h2")
    assert options.package_name == "com.orders"
