# jirakit

A small library for working with JIRA from Python and for turning
JIRA-related results into reports:

- `jirakit.client.JiraClient` talks to the JIRA REST and Agile APIs:
  workflow transitions, comments, issue creation and editing, user
  search, issue links, attachments, worklogs, watchers, labels, boards,
  sprints and votes.
- `jirakit.models` holds the plain dataclasses the client returns
  (`Issue`, `Comment`, `Transition`, `User`, `Worklog`, `Board`,
  `Sprint`, ...).
- `jirakit.reports` holds the dataclasses that describe reports:
  digests, backlog health checks, comment summaries, weekly status,
  similar-issue matches and page analytics.
- `jirakit.render`, `jirakit.similar`, `jirakit.analytics` and
  `jirakit.weekly` render those reports in `markdown` (the default),
  `slack` or `text` format. Any other format name falls back to
  markdown.
- `jirakit.storage` builds Confluence storage-format (XHTML) markup for
  weekly status reports and keeps an index list on a parent page.
- `jirakit.terminal` prints the same reports to a terminal with `rich`.

## Using the client

```python
from jirakit.client import CreateIssueParams, JiraClient, JiraError

client = JiraClient(
    base="https://jira.example.com",
    email="me@example.com",
    token="token",
    project="PROJ",
    session=None,
)

try:
    for transition in client.get_transitions("PROJ-1"):
        print(transition.id, transition.name, "->", transition.to)

    client.add_comment("PROJ-1", "Looks good to me.")
    client.add_labels("PROJ-1", ["needs-review"])

    issue = client.create_issue(
        CreateIssueParams(issue_type="Story", summary="New story", priority="High")
    )
    print("created", issue.key)
except JiraError as err:
    print("JIRA request failed:", err, err.status)
```

Requests authenticate with basic auth (e-mail and API token). Pass your
own `requests.Session` as `session` to reuse connections or configure
proxies; with `None` a new session is created.

A request the server answers with an HTTP error raises `JiraError`;
its message includes the status code and its `status` attribute holds
it. Connection failures also raise `JiraError`, with `status` left as
`None`.

Plain text given for descriptions, comments and worklog comments is
wrapped in an Atlassian Document Format document (`text_to_adf`).
`edit_issue` accepts plain strings for `description`, `priority` and
`assignee` (an account ID) and converts them (`process_fields_for_api`);
other fields are sent as given.

`watch_issue` and `unwatch_issue` act for the authenticated user, whose
account ID `get_myself` returns. `search_users` returns active users
only. `list_boards` lists the boards of the client's `project`, and
`list_sprints(board_id, state)` can filter by state such as `"active"`.

## Rendering reports

```python
from jirakit.models import BoardInfo, Issue
from jirakit.render import render_summary

board = BoardInfo(
    name="Team Board",
    board_type="scrum",
    sprint_name="Sprint 7",
    issues=[Issue(key="PROJ-1", status="In Progress", priority="High", summary="Fix login")],
)
print(render_summary([board], board.issues, "https://jira.example.com", "slack"))
```

`jirakit.render` also has `render_digest`, `render_backlog_health` and
`render_comment_summary`; `write_summary` and `write_digest` render and
save the result to a file. `jirakit.similar.render_similar_issues`,
`jirakit.analytics.render_confluence_analytics` and
`jirakit.weekly.render_weekly_status` take the same `output_format`
argument.

## Confluence storage format

```python
from jirakit.reports import WeeklyProject
from jirakit.storage import index_entry_storage, insert_index_entry, weekly_status_to_storage

page = weekly_status_to_storage(
    "Pat Example",
    "https://jira.example.com",
    [WeeklyProject(project_name="Login", issue_key="PROJ-1", bullets=["Fixed SSO redirect"])],
)

entry = index_entry_storage("Week of June 2", "123456")
index = insert_index_entry("<ul>\n</ul>", entry, "Week of June 2")
```

Inserting an entry whose title is already listed drops the old list
item first, so the index holds no duplicates. A body without a list
gets a new one.

## Terminal output

The `display_*` functions in `jirakit.terminal` draw boxed headers,
tables and bullet lists, with issue statuses, priorities and overall
digest status coloured. Each takes an optional `console`; without one
it prints to a new `rich.console.Console`.

## What it does not do

- There is no command-line program; jirakit is a library only.
- `JiraClient` does not search issues with JQL, read issue details,
  comments or links, or gather board issues. It covers the operations
  listed above.
- There is no Confluence client: `jirakit.storage` only builds markup,
  and publishing pages or fetching page analytics is up to you.
- Digests, backlog health checks, comment summaries and similarity
  matches are not computed here; you fill the `jirakit.reports`
  dataclasses and jirakit renders them.