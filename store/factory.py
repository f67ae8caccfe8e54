"""
Factory function to create storage instances based on environment configuration.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from store.base import BaseDocumentStorage
from store.memory_storage import MemoryDocumentStorage
from store.dynamodb_storage import DynamoDBDocumentStorage


def create_document_storage() -> BaseDocumentStorage:
    """Create a storage instance based on environment configuration.

    Environment variables:
        STORAGE_TYPE: "memory" or "dynamodb" (default: "memory")
        STORAGE_ITEMS_TABLE_NAME: DynamoDB table name (default: "items_api_store")
        AWS_DEFAULT_REGION: AWS region for DynamoDB (default: "us-east-1")
        DYNAMODB_ENDPOINT_URL: optional endpoint override, e.g. DynamoDB Local

    Returns:
        BaseDocumentStorage instance
    """
    storage_type = os.getenv("STORAGE_TYPE", "memory").lower()

    if storage_type == "dynamodb":
        table_name = os.getenv("STORAGE_ITEMS_TABLE_NAME", "items_api_store")
        region_name = os.getenv("AWS_DEFAULT_REGION", "us-east-1")
        endpoint_url = os.getenv("DYNAMODB_ENDPOINT_URL") or None
        return DynamoDBDocumentStorage(
            table_name=table_name,
            region_name=region_name,
            endpoint_url=endpoint_url,
        )
    else:
        # Default to memory storage
        return MemoryDocumentStorage()
