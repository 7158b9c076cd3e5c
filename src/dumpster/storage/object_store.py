"""S3-compatible object storage backend.

Works with AWS S3, MinIO, and Google Cloud Storage through its S3
interoperability endpoint.  Keys are used verbatim as object names.

Usage:
    from dumpster.storage.object_store import connect_object_storage

    storage = connect_object_storage(bucket="db-dumps", region="eu-west-1")
    storage.save("dumps/shop/2024-06-01T00-00-00Z.sql", script.encode())
"""

import logging
from datetime import datetime
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from dumpster.errors import ConnectionFailedError, ObjectNotFoundError, StorageIOError
from dumpster.storage.keys import DUMP_PREFIX, is_expired
from dumpster.storage.metrics import observe

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class ObjectStorage:
    """``Storage`` implementation backed by an S3-compatible bucket.

    Args:
        client: boto3 S3 client.
        bucket: Bucket name.  Use ``connect_object_storage`` to validate it.
        prefix: Namespace enumerated by ``purge`` (default ``dumps``).
        logger: Logger (default: module logger).
    """

    backend_name = "object_store"

    def __init__(
        self,
        client: Any,
        bucket: str,
        prefix: str = DUMP_PREFIX,
        logger: logging.Logger | None = None,
    ):
        self.client = client
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self._logger = logger or logging.getLogger(__name__)

    def save(self, key: str, data: bytes) -> None:
        """Upload ``data`` to ``key``, replacing any existing object."""
        key = key.lstrip("/")
        with observe(self.backend_name, "save_file"):
            try:
                self.client.put_object(Bucket=self.bucket, Key=key, Body=data)
            except (ClientError, BotoCoreError) as e:
                raise StorageIOError(f"Error writing {key} to bucket {self.bucket}: {e}") from e
        self._logger.debug("Uploaded %d bytes to %s/%s", len(data), self.bucket, key)

    def load(self, key: str) -> bytes:
        """Download ``key``."""
        key = key.lstrip("/")
        with observe(self.backend_name, "download_file"):
            try:
                response = self.client.get_object(Bucket=self.bucket, Key=key)
                return response["Body"].read()
            except ClientError as e:
                if _is_not_found(e):
                    raise ObjectNotFoundError(key) from None
                raise StorageIOError(f"Error reading {key} from bucket {self.bucket}: {e}") from e
            except BotoCoreError as e:
                raise StorageIOError(f"Error reading {key} from bucket {self.bucket}: {e}") from e

    def exists(self, key: str) -> bool:
        """Check whether ``key`` exists."""
        try:
            self.client.head_object(Bucket=self.bucket, Key=key.lstrip("/"))
            return True
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise StorageIOError(f"Error checking {key} in bucket {self.bucket}: {e}") from e
        except BotoCoreError as e:
            raise StorageIOError(f"Error checking {key} in bucket {self.bucket}: {e}") from e

    def delete(self, key: str) -> None:
        """Delete ``key``; S3 itself does not report missing keys, so check first."""
        key = key.lstrip("/")
        with observe(self.backend_name, "delete_file"):
            if not self.exists(key):
                raise ObjectNotFoundError(key)
            self._delete_object(key)

    def purge(self, cutoff: datetime) -> int:
        """Delete dumps under the prefix whose key timestamp is before ``cutoff``.

        Lists the whole namespace page by page, then deletes the expired
        keys.  Cost is linear in the number of stored objects.
        """
        with observe(self.backend_name, "purge"):
            expired = [key for key in self.list_keys() if is_expired(key, cutoff, self._logger)]
            for key in expired:
                self._delete_object(key)
                self._logger.info("Purged object: %s", key)
        return len(expired)

    def list_keys(self) -> list[str]:
        """Every key under the prefix."""
        paginator = self.client.get_paginator("list_objects_v2")
        keys: list[str] = []
        try:
            for page in paginator.paginate(Bucket=self.bucket, Prefix=f"{self.prefix}/"):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
        except (ClientError, BotoCoreError) as e:
            raise StorageIOError(f"Error listing bucket {self.bucket}: {e}") from e
        return keys

    def _delete_object(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageIOError(f"Error deleting {key} from bucket {self.bucket}: {e}") from e


def create_s3_client(
    endpoint_url: str | None = None,
    region: str = "us-east-1",
    access_key: str | None = None,
    secret_key: str | None = None,
) -> Any:
    """Build a boto3 S3 client.

    Credentials fall back to the boto3 default chain (``AWS_*`` environment
    variables, shared config, instance roles) when not given.
    """
    client_kwargs: dict[str, Any] = {
        "service_name": "s3",
        "region_name": region,
        "config": Config(signature_version="s3v4"),
    }

    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url

    if access_key and secret_key:
        client_kwargs["aws_access_key_id"] = access_key
        client_kwargs["aws_secret_access_key"] = secret_key

    return boto3.client(**client_kwargs)


def connect_object_storage(
    bucket: str,
    *,
    client: Any = None,
    endpoint_url: str | None = None,
    region: str = "us-east-1",
    logger: logging.Logger | None = None,
) -> ObjectStorage:
    """Create an ``ObjectStorage`` after checking the bucket is reachable.

    Args:
        bucket: Bucket name.
        client: Existing boto3 client (built with ``create_s3_client`` when
            omitted).
        endpoint_url: Custom endpoint for S3-compatible services.
        region: Bucket region.
        logger: Logger for the backend.

    Raises:
        ConnectionFailedError: If no bucket is given or it is inaccessible.
    """
    if not bucket:
        raise ConnectionFailedError("No storage bucket provided")

    if client is None:
        client = create_s3_client(endpoint_url=endpoint_url, region=region)

    try:
        client.head_bucket(Bucket=bucket)
    except (ClientError, BotoCoreError) as e:
        raise ConnectionFailedError(f"Error validating storage bucket {bucket}: {e}") from e

    logger = logger or logging.getLogger(__name__)
    logger.debug("Connected to bucket %s", bucket)
    return ObjectStorage(client, bucket, logger=logger)
