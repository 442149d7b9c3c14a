from typing import TYPE_CHECKING

import boto3

from sundae_dynamo.data._receipt import _Receipt

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient


class DynamoClient(_Receipt):
    """A class used to represent a DynamoDB client for the receipts table."""

    def __init__(self, table_name: str, region: str = "us-east-1"):
        """Initializes a DynamoClient instance.

        Args:
            table_name (str): The name of the DynamoDB table. Its key schema
                must be customerId (HASH) and purchaseDate (RANGE), both
                strings.
            region (str, optional): The AWS region where the DynamoDB table is
                located. Defaults to "us-east-1".

        Attributes:
            _client (DynamoDBClient): The Boto3 DynamoDB client.
            table_name (str): The name of the DynamoDB table.
        """
        super().__init__()

        self._client: DynamoDBClient = boto3.client(
            "dynamodb", region_name=region
        )
        self.table_name = table_name
        # Ensure the table already exists
        try:
            self._client.describe_table(TableName=self.table_name)
        except self._client.exceptions.ResourceNotFoundException as e:
            raise ValueError(
                f"The table '{self.table_name}' does not exist in region "
                f"'{region}'."
            ) from e
