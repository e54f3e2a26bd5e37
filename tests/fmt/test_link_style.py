import unittest

from vc_changelog.fmt.base import ChangelogFormat
from vc_changelog.fmt.link_style import LinkStyle


REPO = "https://example.com/owner/project"
HASH = "123abc891234567890abcdefabc4567898724abc"


class TestLinkStyle(unittest.TestCase):
    def test_parse_is_case_insensitive(self) -> None:
        self.assertIs(LinkStyle.parse("GitHub"), LinkStyle.GITHUB)
        self.assertIs(LinkStyle.parse("cgit"), LinkStyle.CGIT)

    def test_parse_rejects_unknown_style(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            LinkStyle.parse("bitbucket")
        self.assertIn("github", str(ctx.exception))

    def test_commit_links(self) -> None:
        cases = [
            (LinkStyle.GITHUB, f"{REPO}/commit/{HASH}"),
            (LinkStyle.GITLAB, f"{REPO}/commit/{HASH}"),
            (LinkStyle.STASH, f"{REPO}/commits/{HASH}"),
            (LinkStyle.CGIT, f"{REPO}/commit/?id={HASH}"),
        ]
        for style, expected in cases:
            with self.subTest(style=style):
                self.assertEqual(style.commit_link(HASH, REPO), expected)

    def test_issue_links(self) -> None:
        cases = [
            (LinkStyle.GITHUB, f"{REPO}/issues/141"),
            (LinkStyle.GITLAB, f"{REPO}/issues/141"),
            (LinkStyle.STASH, "141"),
            (LinkStyle.CGIT, "141"),
        ]
        for style, expected in cases:
            with self.subTest(style=style):
                self.assertEqual(style.issue_link("141", REPO), expected)

    def test_links_without_repository(self) -> None:
        for style in LinkStyle:
            with self.subTest(style=style):
                self.assertEqual(style.commit_link(HASH, ""), HASH[:8])
                self.assertEqual(style.issue_link("7", ""), "7")


class TestChangelogFormat(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertIs(ChangelogFormat.parse("JSON"), ChangelogFormat.JSON)
        self.assertIs(ChangelogFormat.parse("markdown"), ChangelogFormat.MARKDOWN)
        with self.assertRaises(ValueError):
            ChangelogFormat.parse("html")


if __name__ == "__main__":
    unittest.main()
