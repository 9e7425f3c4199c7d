import unittest

from fake_drive import FakeDriveService, http_error

from gdriveaudit.errors import HierarchyCycleError, NetworkError, TransportError
from gdriveaudit.listing import RemoteListingClient
from gdriveaudit.models import FileInfo, FolderInfo
from gdriveaudit.permissions import PermissionAuditor
from gdriveaudit.scanner import TreeScanner
from gdriveaudit.session import DriveSession


def _build_tree(drive: FakeDriveService) -> None:
    """
    R/
      a.txt   (anyoneWithLink)
      doc     (no size)
      A/      (7k, anyoneWithLink)
        a1.txt
        AA/
          aa1.txt (12k)
      B/
        b1.txt
    """
    drive.add_folder("R", item_id="R")
    drive.add_file("a.txt", "R", item_id="a", size=5, permission_ids=["anyoneWithLink"])
    drive.add_file("doc", "R", item_id="doc", size=None)
    drive.add_folder("A", "R", item_id="A", permission_ids=["7k", "anyoneWithLink"])
    drive.add_folder("B", "R", item_id="B")
    drive.add_file("a1.txt", "A", item_id="a1", size=1)
    drive.add_folder("AA", "A", item_id="AA")
    drive.add_file("aa1.txt", "AA", item_id="aa1", size=2, permission_ids=["12k"])
    drive.add_file("b1.txt", "B", item_id="b1", size=3)


class TestTreeScanner(unittest.TestCase):
    def setUp(self) -> None:
        self.drive = FakeDriveService()
        _build_tree(self.drive)
        session = DriveSession.from_service(self.drive)
        self.scanner = TreeScanner(RemoteListingClient(session), PermissionAuditor(session))

    def test_non_recursive_lists_sized_direct_files_only(self) -> None:
        result = self.scanner.scan("R", False)

        self.assertEqual(result.files, [FileInfo(file_id="a", size=5, name="a.txt", shared=True)])
        self.assertEqual(result.folders, [])
        # Folders are never listed without recursion.
        self.assertEqual(len(self.drive.calls_for("files.list")), 1)

    def test_recursive_collects_all_files_but_direct_folders(self) -> None:
        result = self.scanner.scan("R", True)

        self.assertEqual([f.file_id for f in result.files], ["a", "a1", "aa1", "b1"])
        self.assertEqual(
            result.folders,
            [
                FolderInfo(folder_id="A", name="A", shared=True),
                FolderInfo(folder_id="B", name="B", shared=False),
            ],
        )

    def test_recursive_is_superset_of_flat(self) -> None:
        flat = {f.file_id for f in self.scanner.scan("R", False).files}
        deep = {f.file_id for f in self.scanner.scan("R", True).files}
        self.assertTrue(flat <= deep)

    def test_stale_permissions_revoked_while_scanning(self) -> None:
        result = self.scanner.scan("R", True)

        revoked = {(c["fileId"], c["permissionId"]) for c in self.drive.calls_for("permissions.delete")}
        self.assertEqual(revoked, {("A", "7k"), ("aa1", "12k")})
        aa1 = next(f for f in result.files if f.file_id == "aa1")
        self.assertFalse(aa1.shared)

    def test_nested_folder_mode(self) -> None:
        result = self.scanner.scan("R", True, include_nested_folders=True)

        self.assertEqual([f.folder_id for f in result.folders], ["A", "AA", "B"])
        self.assertEqual([f.file_id for f in result.files], ["a", "a1", "aa1", "b1"])

    def test_nested_flag_ignored_without_recursion(self) -> None:
        result = self.scanner.scan("R", False, include_nested_folders=True)
        self.assertEqual(result.folders, [])

    def test_empty_folder(self) -> None:
        self.drive.add_folder("E", item_id="E")
        result = self.scanner.scan("E", True)
        self.assertEqual(result.files, [])
        self.assertEqual(result.folders, [])

    def test_entry_without_id_is_neither_reported_nor_audited(self) -> None:
        self.drive.add_folder("E", item_id="E")
        self.drive.add_file("ghost.txt", "E", item_id="G", size=3, permission_ids=["5k"])
        self.drive.items["G"]["id"] = None

        result = self.scanner.scan("E", True)

        self.assertEqual(result.files, [])
        self.assertEqual(self.drive.calls_for("permissions.delete"), [])

    def test_cycle_raises_instead_of_diverging(self) -> None:
        # AA also lists A as a child: A -> AA -> A.
        self.drive.items["A"]["parents"].append("AA")

        with self.assertRaises(HierarchyCycleError) as ctx:
            self.scanner.scan("R", True)

        self.assertEqual(ctx.exception.details["folder_id"], "A")
        self.assertEqual(ctx.exception.details["path"], ["R", "A", "AA"])

    def test_folder_with_two_parents_is_expanded_once(self) -> None:
        self.drive.items["AA"]["parents"].append("B")

        result = self.scanner.scan("R", True)

        file_ids = [f.file_id for f in result.files]
        self.assertEqual(file_ids.count("aa1"), 1)
        self.assertEqual([f.folder_id for f in result.folders], ["A", "B"])

    def test_folder_with_two_parents_direct_child_still_reported(self) -> None:
        # AA is both under A and directly under R (listed after A).
        self.drive.items["AA"]["parents"].append("R")

        result = self.scanner.scan("R", True)

        self.assertEqual([f.folder_id for f in result.folders], ["A", "B", "AA"])
        self.assertEqual([f.file_id for f in result.files].count("aa1"), 1)

    def test_listing_failure_aborts_scan(self) -> None:
        # Fourth files.list call lists the folders under A.
        self.drive.fail_on("files.list", OSError("connection reset"), call_index=3)

        with self.assertRaises(NetworkError):
            self.scanner.scan("R", True)

    def test_revoke_failure_aborts_scan(self) -> None:
        self.drive.fail_on("permissions.delete", http_error(500, "backendError"))

        with self.assertRaises(TransportError) as ctx:
            self.scanner.scan("R", True)

        self.assertEqual(ctx.exception.details["file_id"], "aa1")


if __name__ == "__main__":
    unittest.main()
