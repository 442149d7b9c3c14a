from typing import Literal

import pytest

from sundae_dynamo import DynamoClient


@pytest.mark.integration
def test_dynamo_client_init_success(
    dynamodb_table: Literal["MyMockedReceipts"],
):
    client = DynamoClient(dynamodb_table)
    assert client.table_name == dynamodb_table


@pytest.mark.integration
def test_dynamo_client_init_table_not_found(
    dynamodb_table: Literal["MyMockedReceipts"],
):
    with pytest.raises(
        ValueError,
        match="The table 'NonExistentTable' does not exist in region "
        "'us-east-1'.",
    ):
        DynamoClient("NonExistentTable")


@pytest.mark.integration
def test_dynamo_client_init_other_region(
    dynamodb_table: Literal["MyMockedReceipts"],
):
    # Tables are regional, so the same name is missing elsewhere
    with pytest.raises(ValueError, match="region 'us-west-2'"):
        DynamoClient(dynamodb_table, region="us-west-2")
