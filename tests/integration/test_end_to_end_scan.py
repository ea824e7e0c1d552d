"""End-to-end scans through the real HTTP clients over a mock transport."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from cloudscan.cache import SnapshotCache
from cloudscan.domain import ProviderKind, Severity
from cloudscan.providers import build_provider
from cloudscan.providers.drive import DriveClient
from cloudscan.providers.dropbox import DropboxClient
from cloudscan.scanner import run_scan

pytestmark = pytest.mark.integration

FOLDER = "application/vnd.google-apps.folder"


def _clock() -> datetime:
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def drive_handler(request: httpx.Request) -> httpx.Response:
    """Serve a two-page Drive listing plus metadata for the root folder."""
    path = request.url.path
    if path.endswith("/files"):
        if request.url.params.get("pageToken") == "p2":
            return httpx.Response(
                200,
                json={
                    "files": [
                        {
                            "id": "f2",
                            "name": "payroll_2023.xlsx",
                            "mimeType": "application/vnd.ms-excel",
                            "size": "2048",
                            "parents": ["finance"],
                        },
                        {
                            "id": "f3",
                            "name": "orphan.pem",
                            "mimeType": "application/x-pem-file",
                            "parents": ["shared-gone"],
                        },
                    ]
                },
            )
        return httpx.Response(
            200,
            json={
                "files": [
                    {
                        "id": "finance",
                        "name": "Finance",
                        "mimeType": FOLDER,
                        "parents": ["drive-root"],
                    },
                    {
                        "id": "f1",
                        "name": "holiday.jpg",
                        "mimeType": "image/jpeg",
                        "size": "100",
                        "parents": ["drive-root"],
                    },
                ],
                "nextPageToken": "p2",
            },
        )
    if path.endswith("/files/drive-root"):
        return httpx.Response(200, json={"id": "drive-root", "name": "My Drive"})
    return httpx.Response(404, json={"error": {"code": 404}})


def dropbox_handler(request: httpx.Request) -> httpx.Response:
    """Serve a two-page recursive Dropbox listing."""
    body = json.loads(request.content)
    if request.url.path.endswith("/continue"):
        assert body == {"cursor": "cur-1"}
        return httpx.Response(
            200,
            json={
                "entries": [
                    {
                        ".tag": "file",
                        "id": "id:2",
                        "name": "readme.txt",
                        "path_display": "/a/c/readme.txt",
                        "size": 10,
                    },
                    {".tag": "deleted", "name": "old.env", "path_display": "/old.env"},
                ],
                "cursor": "cur-2",
                "has_more": False,
            },
        )
    return httpx.Response(
        200,
        json={
            "entries": [
                {
                    ".tag": "folder",
                    "id": "id:a",
                    "name": "a",
                    "path_display": "/a",
                },
                {
                    ".tag": "file",
                    "id": "id:1",
                    "name": "secret.key",
                    "path_display": "/a/b/secret.key",
                    "size": 64,
                    "client_modified": "2024-01-01T00:00:00Z",
                },
            ],
            "cursor": "cur-1",
            "has_more": True,
        },
    )


class TestDriveEndToEnd:
    """Full Drive scan over the v3 REST client."""

    def test_scan_and_cache(self, cache_dir) -> None:
        client = DriveClient("token", transport=httpx.MockTransport(drive_handler))
        provider = build_provider(ProviderKind.DRIVE, client)
        cache = SnapshotCache(cache_dir)

        result = run_scan(provider, cache=cache, clock=_clock)
        provider.close()

        assert [(f.record.name, f.folder_path) for f in result.findings] == [
            ("orphan.pem", "/"),
            ("payroll_2023.xlsx", "/My Drive/Finance"),
        ]
        assert result.findings[0].max_severity is Severity.HIGH
        assert result.summary.total_records_scanned == 4
        assert set(result.tree.children) == {"Finance", "holiday.jpg", "orphan.pem"}
        assert result.tree.children["holiday.jpg"].mime_type == "image/jpeg"
        assert cache.load("drive") == result


class TestDropboxEndToEnd:
    """Full Dropbox scan over the v2 RPC client."""

    def test_scan_and_cache(self, cache_dir) -> None:
        client = DropboxClient("token", transport=httpx.MockTransport(dropbox_handler))
        provider = build_provider(ProviderKind.DROPBOX, client)
        cache = SnapshotCache(cache_dir)

        result = run_scan(provider, cache=cache, clock=_clock)
        provider.close()

        (finding,) = result.findings
        assert finding.record.name == "secret.key"
        assert finding.folder_path == "/a/b"
        assert [r.category for r in finding.risks] == [
            "Cryptographic Key/Certificate",
            "Secrets/API Keys",
        ]
        assert result.summary.total_records_fetched == 4
        assert result.summary.total_records_scanned == 3

        a = result.tree.children["a"]
        assert a.id == "id:a"
        assert set(a.children) == {"b", "c"}
        assert cache.load("dropbox") == result
