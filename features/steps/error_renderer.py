import typing

from behave import given, use_step_matcher, when

from nft_sdk.errors import error_logger, network_error_handler

# Use regular expressions
use_step_matcher("re")


@given(r'location "(?P<value>.*)"')
def given_location(context: typing.Any, value: str):
    context.location = value


@given(r'message "(?P<value>.*)"')
def given_message(context: typing.Any, value: str):
    context.message = value


@given(r'options "(?P<value>.*)"')
def given_options(context: typing.Any, value: str):
    context.options = value


@given(r'network error with code "(?P<code>.*)" and reason "(?P<reason>.*)"')
def given_network_error(context: typing.Any, code: str, reason: str):
    context.error = {"code": code, "reason": reason}


@given(r'network error "(?P<value>.*)"')
def given_unknown_network_error(context: typing.Any, value: str):
    context.error = value


@when("I render the error")
def when_render_error(context: typing.Any):
    context.output = error_logger(
        context.location, context.message, getattr(context, "options", "")
    )


@when("I classify the network error")
def when_classify_network_error(context: typing.Any):
    context.output = network_error_handler(context.error)
