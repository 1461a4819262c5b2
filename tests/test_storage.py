"""Tests for the abra/storage backends."""
import base64
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import redis
from botocore.exceptions import ClientError

from abra.database import create_db_engine
from abra.shared.exceptions import StorageError
from abra.storage import (
    FileStore,
    GitHubStore,
    MemoryStore,
    R2Store,
    RedisStore,
    SQLStore,
    create_store,
    default_for,
)


class TestDefaults(unittest.TestCase):
    """Absent keys read back as the resource's empty value."""

    def test_default_for(self):
        self.assertEqual(default_for("clients"), [])
        self.assertEqual(default_for("recurring-jobs"), [])
        self.assertEqual(default_for("schedule"), {})

    def test_memory_store_defaults(self):
        store = MemoryStore()
        self.assertEqual(store.read("clients"), [])
        self.assertEqual(store.read("recurring-jobs"), [])
        self.assertEqual(store.read("schedule"), {})

    def test_memory_store_copies_values(self):
        store = MemoryStore()
        value = {"a": [1]}
        store.write("schedule", value, "test")
        value["a"].append(2)
        self.assertEqual(store.read("schedule"), {"a": [1]})
        self.assertEqual(store.write_count, 1)


class TestCreateStore(unittest.TestCase):

    def test_memory(self):
        self.assertIsInstance(create_store("memory"), MemoryStore)

    def test_unknown_backend(self):
        with self.assertRaises(StorageError):
            create_store("floppy")


class TestFileStore(unittest.TestCase):
    """Tests for FileStore."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.data_dir = Path(self.tmp.name) / "data"
        self.store = FileStore(str(self.data_dir))

    def test_missing_file_returns_default(self):
        self.assertEqual(self.store.read("schedule"), {})
        self.assertEqual(self.store.read("clients"), [])

    def test_write_then_read(self):
        self.store.write("clients", [{"id": "c1"}], "Add client")
        self.assertEqual(self.store.read("clients"), [{"id": "c1"}])
        text = (self.data_dir / "clients.json").read_text(encoding="utf-8")
        self.assertEqual(json.loads(text), [{"id": "c1"}])

    def test_overwrite_leaves_no_temp_files(self):
        self.store.write("schedule", {"a": 1}, "first")
        self.store.write("schedule", {"a": 2}, "second")
        self.assertEqual(self.store.read("schedule"), {"a": 2})
        self.assertEqual([p.name for p in self.data_dir.iterdir()], ["schedule.json"])

    def test_corrupt_file(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "schedule.json").write_text("{not json", encoding="utf-8")
        with self.assertRaises(StorageError):
            self.store.read("schedule")


class TestRedisStore(unittest.TestCase):
    """Tests for RedisStore with a mocked client."""

    def setUp(self):
        self.client = MagicMock()
        self.store = RedisStore(client=self.client, key_prefix="data/")

    def test_missing_key(self):
        self.client.get.return_value = None
        self.assertEqual(self.store.read("recurring-jobs"), [])
        self.client.get.assert_called_once_with("data/recurring-jobs")

    def test_read_decodes_once(self):
        self.client.get.return_value = '{"01-03-2026": {}}'
        self.assertEqual(self.store.read("schedule"), {"01-03-2026": {}})

    def test_write_encodes_once(self):
        self.store.write("clients", [{"id": "c1"}], "Add client")
        self.client.set.assert_called_once_with("data/clients", '[{"id": "c1"}]')

    def test_connection_error(self):
        self.client.get.side_effect = redis.ConnectionError("down")
        with self.assertRaises(StorageError):
            self.store.read("schedule")

    def test_write_error(self):
        self.client.set.side_effect = redis.TimeoutError("slow")
        with self.assertRaises(StorageError):
            self.store.write("schedule", {}, "x")

    def test_malformed_value(self):
        self.client.get.return_value = "not json"
        with self.assertRaises(StorageError):
            self.store.read("schedule")


class TestGitHubStore(unittest.TestCase):
    """Tests for GitHubStore against a mocked contents API."""

    def setUp(self):
        self.files = {}
        self.requests = []
        transport = httpx.MockTransport(self.handler)
        self.store = GitHubStore(
            token="secret",
            owner="acme",
            repo="abra",
            client=httpx.Client(transport=transport),
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET":
            if path not in self.files:
                return httpx.Response(404, json={"message": "Not Found"})
            entry = self.files[path]
            return httpx.Response(200, json={"content": entry["content"], "sha": entry["sha"]})
        if request.method == "PUT":
            payload = json.loads(request.content)
            sha = f"sha{len(self.requests)}"
            self.files[path] = {"content": payload["content"], "sha": sha, "payload": payload}
            return httpx.Response(201, json={"content": {"sha": sha}})
        return httpx.Response(405)

    def test_missing_file(self):
        self.assertEqual(self.store.read("clients"), [])
        request = self.requests[0]
        self.assertEqual(request.url.path, "/repos/acme/abra/contents/data/clients.json")
        self.assertEqual(request.url.params["ref"], "main")
        self.assertEqual(request.headers["Authorization"], "Bearer secret")

    def test_write_then_read(self):
        self.store.write("schedule", {"01-03-2026": {}}, "Add job: 42 Main Street")
        self.assertEqual(self.store.read("schedule"), {"01-03-2026": {}})

        payload = self.files["/repos/acme/abra/contents/data/schedule.json"]["payload"]
        self.assertEqual(payload["message"], "Add job: 42 Main Street")
        self.assertEqual(payload["branch"], "main")
        self.assertNotIn("sha", payload)
        decoded = json.loads(base64.b64decode(payload["content"]))
        self.assertEqual(decoded, {"01-03-2026": {}})

    def test_update_sends_current_sha(self):
        self.store.write("clients", [], "first")
        sha = self.files["/repos/acme/abra/contents/data/clients.json"]["sha"]
        self.store.write("clients", [{"id": "c1"}], "second")

        payload = self.files["/repos/acme/abra/contents/data/clients.json"]["payload"]
        self.assertEqual(payload["sha"], sha)
        self.assertEqual(self.store.read("clients"), [{"id": "c1"}])

    def test_api_error(self):
        store = GitHubStore(
            token="secret",
            owner="acme",
            repo="abra",
            client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500))),
        )
        with self.assertRaises(StorageError):
            store.read("schedule")
        with self.assertRaises(StorageError):
            store.write("schedule", {}, "x")


class TestR2Store(unittest.TestCase):
    """Tests for R2Store with a mocked boto3 client."""

    def setUp(self):
        self.client = MagicMock()
        self.store = R2Store(bucket="abra-data", key_prefix="prod/", client=self.client)

    def test_missing_object(self):
        self.client.get_object.side_effect = ClientError(
            {"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject"
        )
        self.assertEqual(self.store.read("clients"), [])

    def test_read_object(self):
        self.client.get_object.return_value = {"Body": io.BytesIO(b'{"01-03-2026": {}}')}
        self.assertEqual(self.store.read("schedule"), {"01-03-2026": {}})
        self.client.get_object.assert_called_once_with(Bucket="abra-data", Key="prod/schedule.json")

    def test_write_object(self):
        self.store.write("clients", [{"id": "c1"}], "Add client: Zoë")
        kwargs = self.client.put_object.call_args.kwargs
        self.assertEqual(kwargs["Key"], "prod/clients.json")
        self.assertEqual(json.loads(kwargs["Body"]), [{"id": "c1"}])
        self.assertEqual(kwargs["ContentType"], "application/json")
        self.assertTrue(kwargs["Metadata"]["description"].isascii())

    def test_access_denied(self):
        self.client.get_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "no"}}, "GetObject"
        )
        with self.assertRaises(StorageError):
            self.store.read("schedule")


class TestSQLStore(unittest.TestCase):
    """Tests for SQLStore on in-memory SQLite."""

    def setUp(self):
        self.engine = create_db_engine("sqlite://")
        self.addCleanup(self.engine.dispose)
        self.store = SQLStore(self.engine)
        self.store.create_tables()

    def test_missing_key(self):
        self.assertEqual(self.store.read("schedule"), {})
        self.assertEqual(self.store.read("recurring-jobs"), [])

    def test_insert_then_update(self):
        self.store.write("clients", [{"id": "c1"}], "first")
        self.store.write("clients", [{"id": "c1"}, {"id": "c2"}], "second")
        self.assertEqual(self.store.read("clients"), [{"id": "c1"}, {"id": "c2"}])


if __name__ == "__main__":
    unittest.main()
