import typing

from behave import given, then, use_step_matcher

# Use regular expressions
use_step_matcher("re")


@given(r'(?P<input_type>address|string) "(?P<input_value>.*)"')
def given_input(context: typing.Any, input_type: str, input_value: str):
    context.input = input_value


@then(r'the result should be string "(?P<expected_value>.*)"')
def then_result_string(context: typing.Any, expected_value: str):
    assert context.output == expected_value, (
        "Expected " + expected_value + " but got " + str(context.output)
    )


@then(r"the result should be bool (?P<expected_value>true|false)")
def then_result_bool(context: typing.Any, expected_value: str):
    expected_val = parse_bool(expected_value)
    assert context.output == expected_val, (
        "Expected " + str(expected_val) + " but got " + str(context.output)
    )


def parse_bool(input_value: str):
    return input_value == "true"
