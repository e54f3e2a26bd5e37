import unittest

from vc_changelog.grouping.alias_table import ComponentTable, SectionTable
from vc_changelog.grouping.classifier import CommitClassifier, resolve_component, resolve_section
from vc_changelog.grouping.commit_model import CommitEntry, RawCommitRecord


class TestResolveSection(unittest.TestCase):
    def test_resolves_aliases_exactly(self) -> None:
        table = SectionTable([("Features", ["ft", "feat"])])
        self.assertEqual(resolve_section("feat", table), "Features")
        self.assertEqual(resolve_section("ft", table), "Features")
        self.assertEqual(resolve_section("xyz", table), "Unknown")
        self.assertEqual(resolve_section("FEAT", table), "Unknown")
        self.assertEqual(resolve_section("unk", table), "Unknown")

    def test_first_declared_section_wins(self) -> None:
        table = SectionTable([("Features", ["feat"]), ("Additions", ["feat", "add"])])
        self.assertEqual(resolve_section("feat", table), "Features")
        self.assertEqual(resolve_section("add", table), "Additions")


class TestResolveComponent(unittest.TestCase):
    def test_alias_and_passthrough(self) -> None:
        table = ComponentTable({"API": ["api"]})
        self.assertEqual(resolve_component("api", table), "API")
        self.assertEqual(resolve_component("web", table), "web")
        self.assertEqual(resolve_component("", table), "")
        self.assertEqual(resolve_component(None, table), "")


class TestCommitClassifier(unittest.TestCase):
    def setUp(self) -> None:
        self.classifier = CommitClassifier(
            SectionTable.default(),
            ComponentTable({"Command Line": ["cli"]}),
        )

    def test_classify_record(self) -> None:
        record = RawCommitRecord(
            hash="abc",
            type_token="ft",
            component_tag="cli",
            subject=" add flag",
            closes=("1",),
            breaks=("",),
        )
        self.assertEqual(
            self.classifier.classify(record),
            CommitEntry(
                hash="abc",
                subject=" add flag",
                component="Command Line",
                section="Features",
                closes=("1",),
                breaks=("",),
            ),
        )

    def test_unconventional_commit_is_unknown(self) -> None:
        entry = self.classifier.parse("abc\nJust some text\nCloses #3")
        self.assertEqual(entry.section, "Unknown")
        self.assertEqual(entry.component, "")
        self.assertEqual(entry.subject, "")
        self.assertEqual(entry.closes, ("3",))

    def test_parse_log_drops_unknown_and_keeps_order(self) -> None:
        log = (
            "h3\nfix(cli): third\n\n==END==\n"
            "h2\nchore: not a section\n\n==END==\n"
            "h1\nfeat: first\n\n==END==\n"
        )
        entries = self.classifier.parse_log(log)
        self.assertEqual([e.hash for e in entries], ["h3", "h1"])
        self.assertEqual([e.section for e in entries], ["Bug Fixes", "Features"])
        self.assertEqual(entries[0].component, "Command Line")

    def test_defaults_without_tables(self) -> None:
        classifier = CommitClassifier()
        self.assertEqual(classifier.parse("h\nperf(db): faster").section, "Performance")
        self.assertEqual(classifier.parse("h\nperf(db): faster").component, "db")


if __name__ == "__main__":
    unittest.main()
