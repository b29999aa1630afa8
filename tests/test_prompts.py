from app.services.prompts import WORKED_EXAMPLES, build_prompt


def test_prompt_embeds_input_and_pretty_format():
    fmt = {"name": {"type": "string"}}
    prompt = build_prompt("Bob is here.", fmt)
    assert '- `input`: "Bob is here."' in prompt
    assert '- `format`: {\n  "name": {\n    "type": "string"\n  }\n}' in prompt


def test_prompt_has_five_worked_examples():
    prompt = build_prompt("x", {})
    assert len(WORKED_EXAMPLES) == 5
    for i in range(1, 6):
        assert f"**Example {i}:**" in prompt
    assert "**Example 6:**" not in prompt
    assert '"city": null' in prompt


def test_prompt_states_the_null_rule():
    prompt = build_prompt("x", {})
    assert "set its value to `null`" in prompt
    assert prompt.rstrip().endswith("outside the JSON object.")


def test_input_is_not_escaped():
    prompt = build_prompt('He said "hi" {}', {})
    assert '"He said "hi" {}"' in prompt


def test_non_ascii_format_is_kept_readable():
    prompt = build_prompt("x", {"città": {"type": "string"}})
    assert '"città"' in prompt


def test_worked_example_outputs_are_indented_inside_the_fence():
    prompt = build_prompt("x", {})
    assert '    ```json\n    {\n      "name": "John",\n      "age": 25\n    }\n    ```' in prompt
