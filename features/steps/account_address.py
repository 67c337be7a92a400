from behave import *

from nft_sdk.account_address import AccountAddress, is_transaction_hash

# Use regular expressions
use_step_matcher("re")


@when("I parse the account address")
def when_parse_account_address(context):
    try:
        context.output = str(AccountAddress.from_str(context.input))
    except Exception as e:
        context.output = e


@when("I check the transaction hash")
def when_check_transaction_hash(context):
    context.output = is_transaction_hash(context.input)


@then("I should fail to parse the account address")
def then_fail_account_address(context):
    assert isinstance(context.output, Exception)
