"""Tests for template rendering."""

from freeplay_lite.render import find_variables, render, render_text
from freeplay_lite.types import Message, PromptTemplate


def make_template(*content):
    return {"prompt_template_id": "t", "prompt_template_version_id": "v", "content": list(content)}


class TestRender:
    def test_substitutes_every_marker(self):
        template = make_template(
            {"role": "system", "content": "Reply in {{language}}."},
            {"role": "user", "content": "Say hello to {{ name }}."},
        )
        rendered = render(template, {"language": "Spanish", "name": "Jairo"})

        assert rendered == [
            Message(role="system", content="Reply in Spanish."),
            Message(role="user", content="Say hello to Jairo."),
        ]

    def test_history_placeholder_is_elided(self, template_body):
        rendered = render(template_body, {"language": "Spanish", "name": "Jairo"})

        assert len(rendered) == len(template_body["content"]) - 1
        assert [m.role for m in rendered] == ["system", "user"]

    def test_missing_variable_is_left_verbatim(self):
        template = make_template({"role": "user", "content": "Hi {{name}}, grade {{ student_grade }}"})
        rendered = render(template, {"name": "Ana"})
        assert rendered[0].content == "Hi Ana, grade {{ student_grade }}"

    def test_accepts_parsed_template(self, template_body):
        parsed = PromptTemplate.from_dict(template_body)
        assert render(parsed, {"language": "French", "name": "Bo"}) == render(
            template_body, {"language": "French", "name": "Bo"}
        )

    def test_non_string_values(self):
        template = make_template({"role": "user", "content": "Grade {{grade}}"})
        assert render(template, {"grade": 7})[0].content == "Grade 7"

    def test_history_is_spliced_when_given(self, template_body):
        history = [
            {"role": "user", "content": "earlier question"},
            Message(role="assistant", content="earlier answer"),
        ]
        rendered = render(template_body, {"language": "Spanish", "name": "Jairo"}, history=history)

        assert [m.content for m in rendered] == [
            "Reply in Spanish.",
            "earlier question",
            "earlier answer",
            "Say hello to Jairo.",
        ]

    def test_does_not_mutate_template(self, template_body):
        render(template_body, {"language": "Spanish", "name": "Jairo"})
        assert template_body["content"][0]["content"] == "Reply in {{language}}."


class TestRenderText:
    def test_triple_brace(self):
        assert render_text("<{{{html}}}>", {"html": "<b>"}) == "<<b>>"

    def test_ampersand_unescaped_form(self):
        assert render_text("{{& html}} and {{&html}}", {"html": "<b>"}) == "<b> and <b>"

    def test_ampersand_form_missing_variable(self):
        assert render_text("{{& html}}", {}) == "{{& html}}"

    def test_substituted_text_is_not_rescanned(self):
        assert render_text("{{a}}", {"a": "{{b}}", "b": "x"}) == "{{b}}"

    def test_no_markers(self):
        assert render_text("plain text", {"unused": "x"}) == "plain text"


class TestFindVariables:
    def test_first_seen_order(self, template_body):
        assert find_variables(template_body) == ["language", "name"]

    def test_includes_ampersand_markers(self):
        template = make_template({"role": "user", "content": "{{& body}} {{title}}"})
        assert find_variables(template) == ["body", "title"]

    def test_deduplicates(self):
        template = make_template(
            {"role": "user", "content": "{{a}} {{b}}"},
            {"role": "assistant", "content": "{{ a }} {{c}}"},
        )
        assert find_variables(template) == ["a", "b", "c"]
