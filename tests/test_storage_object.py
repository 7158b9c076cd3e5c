"""Tests for ObjectStorage and connect_object_storage().

Uses a MagicMock boto3 client; no network access.

Verifies that:
- Missing objects map to ObjectNotFoundError on load and delete
- Transport failures surface as StorageIOError
- purge() parses key timestamps, ignores provider modification times,
  skips non-SQL, unparseable and out-of-range keys, walks every page,
  and is idempotent
- The bucket is validated up front
"""

import io
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from dumpster.errors import ConnectionFailedError, ObjectNotFoundError, StorageIOError
from dumpster.storage.object_store import ObjectStorage, connect_object_storage

UTC = timezone.utc
CUTOFF = datetime(2024, 1, 1, tzinfo=UTC)


def _client_error(code: str, operation: str = "GetObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def _make_s3_client(pages: list[list[str]] | None = None) -> MagicMock:
    """Mock S3 client whose paginator yields ``pages`` of keys.

    Every listed object reports a LastModified far in the past so tests
    catch any use of provider modification times.
    """
    client = MagicMock()
    paginator = MagicMock()
    paginator.paginate.return_value = [
        {
            "Contents": [
                {"Key": key, "Size": 1, "LastModified": datetime(2000, 1, 1, tzinfo=UTC)}
                for key in page
            ]
        }
        for page in (pages or [])
    ]
    client.get_paginator.return_value = paginator
    return client


def _deleted_keys(client: MagicMock) -> list[str]:
    return [c.kwargs["Key"] for c in client.delete_object.call_args_list]


class TestSaveLoad:
    """save() and load()."""

    def test_save_puts_object(self) -> None:
        client = _make_s3_client()
        ObjectStorage(client, "bkt").save("dumps/shop/a.sql", b"data")

        client.put_object.assert_called_once_with(Bucket="bkt", Key="dumps/shop/a.sql", Body=b"data")

    def test_save_failure(self) -> None:
        client = _make_s3_client()
        client.put_object.side_effect = _client_error("AccessDenied", "PutObject")

        with pytest.raises(StorageIOError):
            ObjectStorage(client, "bkt").save("dumps/a.sql", b"data")

    def test_load_returns_body(self) -> None:
        client = _make_s3_client()
        client.get_object.return_value = {"Body": io.BytesIO(b"dump")}

        assert ObjectStorage(client, "bkt").load("dumps/a.sql") == b"dump"

    def test_load_missing(self) -> None:
        client = _make_s3_client()
        client.get_object.side_effect = _client_error("NoSuchKey")

        with pytest.raises(ObjectNotFoundError):
            ObjectStorage(client, "bkt").load("dumps/a.sql")

    def test_load_other_error(self) -> None:
        client = _make_s3_client()
        client.get_object.side_effect = _client_error("AccessDenied")

        with pytest.raises(StorageIOError):
            ObjectStorage(client, "bkt").load("dumps/a.sql")


class TestDelete:
    """delete() reports missing keys even though S3 does not."""

    def test_delete_existing(self) -> None:
        client = _make_s3_client()
        ObjectStorage(client, "bkt").delete("dumps/a.sql")

        client.delete_object.assert_called_once_with(Bucket="bkt", Key="dumps/a.sql")

    def test_delete_missing(self) -> None:
        client = _make_s3_client()
        client.head_object.side_effect = _client_error("404", "HeadObject")

        with pytest.raises(ObjectNotFoundError):
            ObjectStorage(client, "bkt").delete("dumps/a.sql")
        client.delete_object.assert_not_called()

    def test_delete_unreachable_endpoint(self) -> None:
        client = _make_s3_client()
        client.head_object.side_effect = EndpointConnectionError(endpoint_url="http://s3")

        with pytest.raises(StorageIOError):
            ObjectStorage(client, "bkt").delete("dumps/a.sql")
        client.delete_object.assert_not_called()

    def test_exists_unreachable_endpoint(self) -> None:
        client = _make_s3_client()
        client.head_object.side_effect = EndpointConnectionError(endpoint_url="http://s3")

        with pytest.raises(StorageIOError):
            ObjectStorage(client, "bkt").exists("dumps/a.sql")


class TestPurge:
    """purge() applies file-name timestamps across the whole namespace."""

    def test_scenario_removes_only_old_sql(self) -> None:
        client = _make_s3_client([[
            "dumps/2023-01-01T00-00-00Z.sql",
            "dumps/2024-06-01T00-00-00Z.sql",
            "dumps/readme.txt",
        ]])

        removed = ObjectStorage(client, "bkt").purge(CUTOFF)

        assert removed == 1
        assert _deleted_keys(client) == ["dumps/2023-01-01T00-00-00Z.sql"]

    def test_lists_dump_prefix(self) -> None:
        client = _make_s3_client([])
        ObjectStorage(client, "bkt").purge(CUTOFF)

        client.get_paginator.assert_called_once_with("list_objects_v2")
        client.get_paginator.return_value.paginate.assert_called_once_with(Bucket="bkt", Prefix="dumps/")

    def test_walks_every_page(self) -> None:
        client = _make_s3_client([
            ["dumps/shop/2022-01-01T00-00-00Z.sql"],
            ["dumps/shop/2023-01-01T00:00:00Z.sql", "dumps/shop/2025-01-01T00-00-00Z.sql"],
        ])

        removed = ObjectStorage(client, "bkt").purge(CUTOFF)

        assert removed == 2
        assert _deleted_keys(client) == [
            "dumps/shop/2022-01-01T00-00-00Z.sql",
            "dumps/shop/2023-01-01T00:00:00Z.sql",
        ]

    def test_unparseable_key_is_skipped(self) -> None:
        client = _make_s3_client([["dumps/shop/latest.sql", "dumps/shop/2023-01-01T00-00-00Z.sql"]])

        assert ObjectStorage(client, "bkt").purge(CUTOFF) == 1

    def test_out_of_range_keys_are_skipped(self) -> None:
        client = _make_s3_client([[
            "dumps/2023-01-01T00-00-00Z.sql",
            "dumps/2023-01-01T00-00-00+24-00.sql",
            "dumps/0001-01-01T00-00-00+01-00.sql",
        ]])

        removed = ObjectStorage(client, "bkt").purge(CUTOFF)

        assert removed == 1
        assert _deleted_keys(client) == ["dumps/2023-01-01T00-00-00Z.sql"]

    def test_idempotent(self) -> None:
        client = _make_s3_client()
        client.get_paginator.return_value.paginate.side_effect = [
            [{"Contents": [
                {"Key": "dumps/2023-01-01T00-00-00Z.sql"},
                {"Key": "dumps/2024-06-01T00-00-00Z.sql"},
            ]}],
            [{"Contents": [{"Key": "dumps/2024-06-01T00-00-00Z.sql"}]}],
        ]
        storage = ObjectStorage(client, "bkt")

        assert storage.purge(CUTOFF) == 1
        assert storage.purge(CUTOFF) == 0
        assert _deleted_keys(client) == ["dumps/2023-01-01T00-00-00Z.sql"]

    def test_empty_page(self) -> None:
        client = _make_s3_client()
        client.get_paginator.return_value.paginate.return_value = [{}]

        assert ObjectStorage(client, "bkt").purge(CUTOFF) == 0

    def test_listing_failure(self) -> None:
        client = _make_s3_client()
        client.get_paginator.return_value.paginate.side_effect = _client_error("AccessDenied", "ListObjectsV2")

        with pytest.raises(StorageIOError):
            ObjectStorage(client, "bkt").purge(CUTOFF)


class TestConnectObjectStorage:
    """connect_object_storage() validates the bucket before use."""

    def test_validates_bucket(self) -> None:
        client = _make_s3_client()
        storage = connect_object_storage("bkt", client=client)

        client.head_bucket.assert_called_once_with(Bucket="bkt")
        assert isinstance(storage, ObjectStorage)
        assert storage.bucket == "bkt"

    def test_inaccessible_bucket(self) -> None:
        client = _make_s3_client()
        client.head_bucket.side_effect = _client_error("403", "HeadBucket")

        with pytest.raises(ConnectionFailedError):
            connect_object_storage("bkt", client=client)

    def test_no_bucket(self) -> None:
        with pytest.raises(ConnectionFailedError):
            connect_object_storage("", client=_make_s3_client())
