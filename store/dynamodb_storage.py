"""
DynamoDB storage backend for persistent storage.
"""
import logging
import os
import uuid
import warnings
from datetime import datetime
from decimal import Decimal
from typing import Dict, Any, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import StoreError
from store.base import BaseDocumentStorage

logger = logging.getLogger(__name__)

# Attributes owned by the table layout; never part of a document
RESERVED_ATTRIBUTES = ("namespace", "key", "updated_at")


def _to_dynamodb(value: Any) -> Any:
    """Convert a JSON value into something boto3 can serialize."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamodb(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamodb(v) for v in value]
    return value


def _from_dynamodb(value: Any) -> Any:
    """Convert boto3 values (Decimal numbers in particular) back into JSON values."""
    if isinstance(value, Decimal):
        return int(value) if value % 1 == 0 else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamodb(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_from_dynamodb(v) for v in value]
    return value


class DynamoDBDocumentStorage(BaseDocumentStorage):
    """DynamoDB storage backend for document collections.

    Each collection is a partition (``namespace``) and each document a row
    keyed by ``key``. Document fields are stored as top-level attributes so
    updates can merge individual fields.
    """

    def __init__(
        self,
        table_name: str = "items_api_store",
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        create_if_missing: bool = True,
    ):
        """Initialize DynamoDB storage.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region name (defaults to AWS_DEFAULT_REGION env var)
            endpoint_url: Optional endpoint override, e.g. DynamoDB Local
            create_if_missing: Create the table on startup when it does not exist
        """
        self.table_name = table_name
        self.region_name = region_name or os.getenv("AWS_DEFAULT_REGION", "us-east-1")
        self.endpoint_url = endpoint_url

        self.dynamodb = boto3.resource(
            "dynamodb",
            region_name=self.region_name,
            endpoint_url=self.endpoint_url,
        )
        self.table = self.dynamodb.Table(table_name)

        if create_if_missing:
            self._init_table()

    def _init_table(self):
        """Initialize DynamoDB table if it doesn't exist."""
        try:
            self.table.meta.client.describe_table(TableName=self.table_name)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ResourceNotFoundException":
                self._create_table()
            elif error_code in ["UnrecognizedClientException", "InvalidClientTokenId", "AccessDeniedException"]:
                # Credentials problem: keep serving, requests will fail with StoreError
                warnings.warn(
                    f"DynamoDB credentials issue: {error_code}. "
                    "Table operations may fail. Please check AWS credentials.",
                    UserWarning
                )
            else:
                raise StoreError(f"DynamoDB error: {str(e)}")
        except BotoCoreError as e:
            warnings.warn(f"DynamoDB unreachable at startup: {str(e)}", UserWarning)

    def _create_table(self):
        """Create DynamoDB table."""
        logger.info("Creating DynamoDB table %s", self.table_name)
        try:
            self.dynamodb.create_table(
                TableName=self.table_name,
                KeySchema=[
                    {"AttributeName": "namespace", "KeyType": "HASH"},
                    {"AttributeName": "key", "KeyType": "RANGE"},
                ],
                AttributeDefinitions=[
                    {"AttributeName": "namespace", "AttributeType": "S"},
                    {"AttributeName": "key", "AttributeType": "S"},
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            self.table.wait_until_exists()
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceInUseException":
                raise StoreError(f"DynamoDB error: {str(e)}")

    def _to_document(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Strip table attributes from a row."""
        return {
            name: _from_dynamodb(value)
            for name, value in item.items()
            if name not in RESERVED_ATTRIBUTES
        }

    def push(self, collection: str, document: Dict[str, Any]) -> str:
        """Write a document under a new unique key."""
        key = str(uuid.uuid4())
        item = {
            name: _to_dynamodb(value)
            for name, value in document.items()
            if name not in RESERVED_ATTRIBUTES
        }
        item.update({
            "namespace": collection,
            "key": key,
            "updated_at": datetime.utcnow().isoformat(),
        })

        try:
            self.table.put_item(
                Item=item,
                ConditionExpression="attribute_not_exists(#key)",
                ExpressionAttributeNames={"#key": "key"},
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"DynamoDB error: {str(e)}")

        logger.debug("Pushed %s/%s", collection, key)
        return key

    def get_all(self, collection: str) -> Dict[str, Dict[str, Any]]:
        """Return every document of the collection, following pagination."""
        documents: Dict[str, Dict[str, Any]] = {}
        query_kwargs: Dict[str, Any] = {
            "KeyConditionExpression": Key("namespace").eq(collection),
        }

        try:
            while True:
                response = self.table.query(**query_kwargs)
                for item in response.get("Items", []):
                    documents[item["key"]] = self._to_document(item)

                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                query_kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"DynamoDB error: {str(e)}")

        return documents

    def update(self, collection: str, key: str, fields: Dict[str, Any]) -> bool:
        """Merge fields into an existing document.

        The existence check is part of the write (ConditionExpression), so an
        update never creates a document.
        """
        names = {"#key": "key", "#updated_at": "updated_at"}
        values: Dict[str, Any] = {":updated_at": datetime.utcnow().isoformat()}
        assignments = ["#updated_at = :updated_at"]
        for index, (name, value) in enumerate(fields.items()):
            if name in RESERVED_ATTRIBUTES:
                continue
            names[f"#f{index}"] = name
            values[f":v{index}"] = _to_dynamodb(value)
            assignments.append(f"#f{index} = :v{index}")

        try:
            self.table.update_item(
                Key={"namespace": collection, "key": key},
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression="attribute_exists(#key)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                return False
            raise StoreError(f"DynamoDB error: {str(e)}")
        except BotoCoreError as e:
            raise StoreError(f"DynamoDB error: {str(e)}")

        logger.debug("Updated %s/%s fields=%s", collection, key, sorted(fields))
        return True

    def delete(self, collection: str, key: str) -> bool:
        """Delete a document."""
        try:
            response = self.table.delete_item(
                Key={"namespace": collection, "key": key},
                ReturnValues="ALL_OLD",
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"DynamoDB error: {str(e)}")

        logger.debug("Deleted %s/%s", collection, key)
        return "Attributes" in response
