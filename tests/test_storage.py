from jirakit.reports import WeeklyProject
from jirakit.storage import (
    index_entry_storage,
    insert_index_entry,
    weekly_status_to_storage,
)

SERVER = "https://jira.example.com"


def test_weekly_status_heading_and_links():
    projects = [
        WeeklyProject(project_name="Alpha & Beta", issue_key="TEST-1", bullets=["Fixed <bug>"]),
        WeeklyProject(project_name="Gamma", issue_key="TEST-2", bullets=["a", "b"]),
    ]
    out = weekly_status_to_storage("Alice & Bob", SERVER, projects)
    assert out.startswith("<h2>Alice &amp; Bob</h2>\n")
    assert f'<a href="{SERVER}/browse/TEST-1">TEST-1</a>' in out
    assert "Alpha &amp; Beta" in out
    assert "      <li>Fixed &lt;bug&gt;</li>\n" in out
    assert out.count("<ul>\n") == 4
    assert out.count("</ul>\n") == 4
    assert out.endswith("</ul>\n")


def test_weekly_status_no_projects():
    assert weekly_status_to_storage("Alice", SERVER, []) == "<h2>Alice</h2>\n"


def test_index_entry_storage_format():
    entry = index_entry_storage("Week 1", "42")
    assert entry == (
        '<li><ac:link><ri:content-id ri:content-id="42" />'
        "<ac:plain-text-link-body><![CDATA[Week 1]]></ac:plain-text-link-body>"
        "</ac:link></li>"
    )


def test_index_entry_escapes_title():
    entry = index_entry_storage("A & B", "7")
    assert "<![CDATA[A &amp; B]]>" in entry


def test_insert_without_list_prepends_new_list():
    entry = index_entry_storage("Week 1", "42")
    result = insert_index_entry("<p>intro</p>", entry, "Week 1")
    assert result == "<ul>\n" + entry + "\n</ul>\n<p>intro</p>"


def test_insert_into_existing_list_goes_first():
    body = "<p>x</p>\n<ul>\n<li>old</li>\n</ul>"
    entry = index_entry_storage("Week 2", "99")
    result = insert_index_entry(body, entry, "Week 2")
    assert result == "<p>x</p>\n<ul>\n" + entry + "\n<li>old</li>\n</ul>"


def test_insert_replaces_existing_entry_with_same_title():
    old = index_entry_storage("Week 3", "1")
    body = insert_index_entry("", old, "Week 3")
    new = index_entry_storage("Week 3", "2")
    result = insert_index_entry(body, new, "Week 3")
    assert old not in result
    assert result.count("Week 3") == 1
    assert new in result


def test_insert_keeps_unrelated_entries():
    first = index_entry_storage("Week 4", "4")
    body = insert_index_entry("", first, "Week 4")
    second = index_entry_storage("Week 5", "5")
    result = insert_index_entry(body, second, "Week 5")
    assert first in result and second in result
    assert result.index(second) < result.index(first)