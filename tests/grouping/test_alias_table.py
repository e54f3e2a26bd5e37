import unittest

from vc_changelog.grouping.alias_table import (
    BREAKING_SECTION,
    UNKNOWN_SECTION,
    ComponentTable,
    SectionTable,
)


class TestSectionTable(unittest.TestCase):
    def test_default_order(self) -> None:
        table = SectionTable.default()
        self.assertEqual(
            table.names(),
            ["Features", "Bug Fixes", "Performance", UNKNOWN_SECTION, BREAKING_SECTION],
        )
        self.assertEqual(table.aliases_for("Features"), frozenset({"ft", "feat"}))

    def test_unknown_section_always_present(self) -> None:
        table = SectionTable([("Features", ["feat"])])
        self.assertIn(UNKNOWN_SECTION, table)
        self.assertEqual(table.names(), ["Features", UNKNOWN_SECTION])
        self.assertEqual(table.aliases_for(UNKNOWN_SECTION), frozenset({"unk"}))

    def test_with_overrides_returns_fresh_table(self) -> None:
        base = SectionTable.default()
        merged = base.with_overrides({"Bug Fixes": ["bugfix"], "Documentation": ["docs"]})

        # existing section keeps its position, new one is appended
        self.assertEqual(merged.names()[1], "Bug Fixes")
        self.assertEqual(merged.names()[-1], "Documentation")
        self.assertEqual(merged.aliases_for("Bug Fixes"), frozenset({"bugfix"}))
        # the receiver is untouched
        self.assertEqual(base.aliases_for("Bug Fixes"), frozenset({"fx", "fix"}))
        self.assertNotIn("Documentation", base)

    def test_unknown_cannot_be_realiased(self) -> None:
        merged = SectionTable.default().with_overrides({UNKNOWN_SECTION: ["misc"]})
        self.assertEqual(merged.aliases_for(UNKNOWN_SECTION), frozenset({"unk"}))

    def test_all_aliases_follow_section_order(self) -> None:
        aliases = SectionTable.default().all_aliases()
        self.assertEqual(aliases, ["feat", "ft", "fix", "fx", "perf", "unk", "breaks"])

    def test_duplicate_aliases(self) -> None:
        table = SectionTable.default().with_overrides({"Features": ["feat"], "New Stuff": ["feat", "new"]})
        self.assertEqual(table.duplicate_aliases(), {"feat": ["Features", "New Stuff"]})
        self.assertEqual(SectionTable.default().duplicate_aliases(), {})

    def test_aliases_for_unknown_name_raises(self) -> None:
        with self.assertRaises(KeyError):
            SectionTable.default().aliases_for("Nope")

    def test_equality(self) -> None:
        self.assertEqual(SectionTable.default(), SectionTable.default())
        self.assertNotEqual(SectionTable.default(), SectionTable([("Features", ["feat"])]))


class TestComponentTable(unittest.TestCase):
    def test_overrides_and_duplicates(self) -> None:
        table = ComponentTable({"API": ["api"]}).with_overrides({"Web": ["web", "api"]})
        self.assertEqual(table.names(), ["API", "Web"])
        self.assertEqual(len(table), 2)
        self.assertEqual(table.duplicate_aliases(), {"api": ["API", "Web"]})

    def test_empty_by_default(self) -> None:
        self.assertEqual(len(ComponentTable()), 0)
        self.assertEqual(ComponentTable(), ComponentTable({}))


if __name__ == "__main__":
    unittest.main()
