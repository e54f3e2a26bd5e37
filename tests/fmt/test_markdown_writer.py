import io
import unittest

from vc_changelog.fmt.base import ReleaseInfo
from vc_changelog.fmt.link_style import LinkStyle
from vc_changelog.fmt.markdown_writer import MarkdownWriter
from vc_changelog.grouping.alias_table import SectionTable
from vc_changelog.grouping.commit_model import CommitEntry
from vc_changelog.grouping.section_map import SectionMap


REPO = "https://github.com/owner/project"
ORDER = SectionTable.default().names()


def render(release: ReleaseInfo, entries) -> str:
    buffer = io.StringIO()
    MarkdownWriter(buffer).write_changelog(release, ORDER, SectionMap.from_commits(entries))
    return buffer.getvalue()


class TestMarkdownWriter(unittest.TestCase):
    def setUp(self) -> None:
        self.release = ReleaseInfo(version="v1.0.0", date="2024-01-02", repository=REPO)

    def test_full_document(self) -> None:
        entries = [
            CommitEntry(hash="aaa111", subject=" add retry", component="core", section="Features", closes=("5",)),
            CommitEntry(hash="bbb222", subject=" crash on empty input", component="", section="Bug Fixes", breaks=("",)),
        ]
        expected = (
            '<a name="v1.0.0"></a>\n## v1.0.0 (2024-01-02)\n\n'
            "\n#### Features\n\n"
            f"* **core:** add retry ([aaa111]({REPO}/commit/aaa111), closes [#5]({REPO}/issues/5))\n"
            "\n#### Bug Fixes\n\n"
            f"* crash on empty input ([bbb222]({REPO}/commit/bbb222))\n"
            "\n#### Breaking Changes\n\n"
            f"* crash on empty input ([bbb222]({REPO}/commit/bbb222))\n"
        )
        self.assertEqual(render(self.release, entries), expected)

    def test_header_for_patch_release_with_subtitle(self) -> None:
        release = ReleaseInfo(version="v1.0.1", subtitle="Hotfix", patch_version=True, date="2024-01-03")
        output = render(release, [])
        self.assertEqual(output, '<a name="v1.0.1"></a>\n### v1.0.1 Hotfix (2024-01-03)\n\n')

    def test_component_with_several_entries_is_nested(self) -> None:
        entries = [
            CommitEntry(hash="a" * 40, subject=" one", component="ui", section="Features"),
            CommitEntry(hash="b" * 40, subject=" two", component="ui", section="Features"),
        ]
        output = render(self.release, entries)
        self.assertIn("* **ui:**\n  * one ([aaaaaaaa]", output)
        self.assertIn("\n  * two ([bbbbbbbb]", output)

    def test_breaks_references_are_linked(self) -> None:
        entries = [
            CommitEntry(hash="c" * 40, subject=" drop v1 api", component="", section="Features", breaks=("9", "")),
        ]
        output = render(self.release, entries)
        self.assertIn(f", breaks [#9]({REPO}/issues/9))", output)
        self.assertNotIn("[#]", output)

    def test_links_degrade_without_repository(self) -> None:
        release = ReleaseInfo(version="v2", date="2024-01-02", link_style=LinkStyle.STASH)
        entries = [CommitEntry(hash="d" * 40, subject=" x", component="", section="Performance", closes=("4",))]
        output = render(release, entries)
        self.assertIn("* x ([dddddddd](dddddddd), closes [#4](4))", output)


if __name__ == "__main__":
    unittest.main()
