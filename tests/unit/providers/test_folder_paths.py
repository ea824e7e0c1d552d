"""Tests for Drive folder path resolution."""

import logging

from cloudscan.domain import FileRecord
from cloudscan.providers import EntryMetadata
from cloudscan.providers.drive import DriveEnumerator, FolderPathResolver


def _folder(folder_id: str, name: str, *parents: str) -> FileRecord:
    return FileRecord(id=folder_id, name=name, is_folder=True, parent_ids=parents)


class TestResolve:
    """Tests for FolderPathResolver.resolve."""

    def test_parentless_record_is_root(self, fake_source) -> None:
        resolver = FolderPathResolver(fake_source([]))
        assert resolver.resolve(()) == "/"

    def test_walks_registered_folders(self, fake_source) -> None:
        source = fake_source(
            [], metadata={"drive-root": EntryMetadata(name="My Drive")}
        )
        resolver = FolderPathResolver(source)
        resolver.register(_folder("work", "Work", "drive-root"))
        resolver.register(_folder("keys", "Keys", "work"))

        assert resolver.resolve(("keys",)) == "/My Drive/Work/Keys"

    def test_unknown_ancestors_looked_up_once(self, fake_source) -> None:
        source = fake_source(
            [],
            metadata={
                "shared": EntryMetadata(name="Shared", parent_ids=("top",)),
                "top": EntryMetadata(name="Top"),
            },
        )
        resolver = FolderPathResolver(source)

        assert resolver.resolve(("shared",)) == "/Top/Shared"
        assert resolver.resolve(("shared", "other")) == "/Top/Shared"
        assert source.metadata_calls == ["shared", "top"]
        assert resolver.lookups == 2

    def test_only_primary_parent_followed(self, fake_source) -> None:
        source = fake_source([], metadata={"a": EntryMetadata(name="A")})
        resolver = FolderPathResolver(source)
        assert resolver.resolve(("a", "b")) == "/A"
        assert "b" not in source.metadata_calls

    def test_failed_lookup_gives_root(self, fake_source, caplog) -> None:
        source = fake_source([], failing_ids=("gone",))
        resolver = FolderPathResolver(source)
        resolver.register(_folder("child", "Child", "gone"))

        with caplog.at_level(logging.DEBUG, logger="cloudscan.providers.drive.paths"):
            assert resolver.resolve(("child",)) == "/"

        assert "gone" in caplog.text

    def test_failed_lookup_memoized(self, fake_source) -> None:
        source = fake_source([], failing_ids=("gone",))
        resolver = FolderPathResolver(source)
        resolver.register(_folder("a", "A", "gone"))
        resolver.register(_folder("b", "B", "gone"))

        assert resolver.resolve(("a",)) == "/"
        assert resolver.resolve(("b",)) == "/"
        assert source.metadata_calls == ["gone"]

    def test_loop_gives_root(self, fake_source) -> None:
        resolver = FolderPathResolver(fake_source([]))
        resolver.register(_folder("a", "A", "b"))
        resolver.register(_folder("b", "B", "a"))
        assert resolver.resolve(("a",)) == "/"


class TestDriveEnumeratorPaths:
    """Tests for folder paths produced during Drive enumeration."""

    def test_listed_folders_need_no_lookup(self, fake_source, drive_entry) -> None:
        source = fake_source(
            [
                [
                    drive_entry("work", "Work", ("drive-root",), folder=True),
                    drive_entry("f1", ".env", ("work",)),
                ]
            ],
            metadata={"drive-root": EntryMetadata(name="My Drive")},
        )
        enumerator = DriveEnumerator(source)
        paths: dict[str, str] = {}

        enumerator.enumerate(
            on_record=lambda r: paths.setdefault(r.id, enumerator.folder_path(r))
        )

        assert paths["f1"] == "/My Drive/Work"
        assert source.metadata_calls == ["drive-root"]

    def test_unknown_parent_file_has_root_path(self, fake_source, drive_entry) -> None:
        source = fake_source([[drive_entry("f1", "id_rsa", ("nowhere",))]])
        enumerator = DriveEnumerator(source)
        (record,) = enumerator.enumerate()
        assert enumerator.folder_path(record) == "/"
