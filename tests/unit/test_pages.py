"""Unit tests for AtCoder page parsing and acceptance rules."""

from datetime import timedelta

import pytest

from acick.domain.exceptions import (
    ContestNotFoundError,
    InvalidCredentialsError,
    InvalidResponseError,
    NotLoggedInError,
    NotParticipatingError,
)
from acick.domain.models import Bytes, ContestId, ProblemId, Sample
from acick.domain.parsers import parse_html
from acick.infrastructure.pages import (
    LOGIN_URL,
    SETTINGS_URL,
    LoginPage,
    SettingsPage,
    SubmitPage,
    TasksPage,
    TasksPrintPage,
    extract_samples,
    submit_url,
    tasks_print_url,
    tasks_url,
)
from helpers import (
    FakeResponse,
    alert_html,
    login_html,
    settings_html,
    submit_html,
    tasks_html,
    tasks_print_html,
)

ARC100 = ContestId("arc100")


class TestUrls:
    def test_urls(self):
        assert LOGIN_URL == "https://atcoder.jp/login"
        assert tasks_url(ARC100) == "https://atcoder.jp/contests/arc100/tasks"
        assert tasks_print_url(ARC100) == "https://atcoder.jp/contests/arc100/tasks_print"
        assert submit_url(ARC100) == "https://atcoder.jp/contests/arc100/submit"


class TestAcceptance:
    def test_login_page_rejects_non_200(self, adapter, http_client, console):
        adapter.add("GET", LOGIN_URL, FakeResponse(403))

        with pytest.raises(InvalidResponseError):
            LoginPage.fetch(http_client, LOGIN_URL, console)

    def test_settings_redirect_means_bad_credentials(self, adapter, http_client, console):
        adapter.add("GET", SETTINGS_URL, FakeResponse(302, headers={"Location": "/login"}))

        with pytest.raises(InvalidCredentialsError):
            SettingsPage.fetch(http_client, SETTINGS_URL, console)

    @pytest.mark.parametrize(
        "status, text, error",
        [
            (302, "", NotLoggedInError),
            (404, alert_html("Contest not found."), ContestNotFoundError),
            (404, alert_html("Permission denied."), NotParticipatingError),
            (404, "<html></html>", InvalidResponseError),
            (403, "", InvalidResponseError),
        ],
    )
    def test_restricted_page_rejections(self, adapter, http_client, console, status, text, error):
        url = tasks_url(ARC100)
        adapter.add("GET", url, FakeResponse(status, text, headers={"Location": "/login"} if status == 302 else {}))

        with pytest.raises(error):
            TasksPage.fetch(http_client, url, console)


class TestHeader:
    def test_logged_out(self, adapter, http_client, console):
        adapter.add("GET", LOGIN_URL, FakeResponse(200, login_html(None)))

        page = LoginPage.fetch(http_client, LOGIN_URL, console)

        assert not page.is_logged_in()
        assert page.current_user() is None
        assert page.extract_csrf_token() == "abc"

    def test_logged_in(self, adapter, http_client, console):
        adapter.add("GET", SETTINGS_URL, FakeResponse(200, settings_html("acick_test")))

        page = SettingsPage.fetch(http_client, SETTINGS_URL, console)

        assert page.is_logged_in()
        assert page.current_user() == "acick_test"


class TestTasksPage:
    def test_extracts_rows(self, adapter, http_client, console):
        url = tasks_url(ARC100)
        html = tasks_html(
            "AtCoder Regular Contest 100",
            [
                ("arc100", "C", "arc100_a", "Linear Approximation", "2 sec", "1024 MB"),
                ("arc100", "D", "arc100_b", "Equal Cut", "2 sec", "1024 MB"),
            ],
        )
        adapter.add("GET", url, FakeResponse(200, html))

        page = TasksPage.fetch(http_client, url, console)
        problems = page.extract_problems(console)

        assert page.extract_contest_name() == "AtCoder Regular Contest 100"
        assert [p.id for p in problems] == ["C", "D"]
        assert problems[0].name == "Linear Approximation"
        assert problems[0].url_name == "arc100_a"
        assert problems[0].time_limit == timedelta(seconds=2)
        assert problems[0].memory_limit == Bytes(1024 * 1000**2)

    def test_unparseable_limits_warn_and_degrade(self, adapter, http_client, console):
        url = tasks_url(ARC100)
        html = tasks_html("ARC 100", [("arc100", "C", "arc100_a", "Linear", "forever", "lots")])
        adapter.add("GET", url, FakeResponse(200, html))

        problems = TasksPage.fetch(http_client, url, console).extract_problems(console)

        assert problems[0].time_limit is None
        assert problems[0].memory_limit is None
        output = console.take_output()
        assert "WARN: Could not parse time limit" in output
        assert "WARN: Could not parse memory limit" in output


class TestTasksPrintPage:
    def test_extracts_samples_map(self, adapter, http_client, console):
        url = tasks_print_url(ARC100)
        html = tasks_print_html(
            [
                ("C", "Linear Approximation", [("5\n2 2 3 5 5\n", "2\n"), ("1\n1\n", "0\n")]),
                ("D", "Equal Cut", [("5\n3 2 4 1 2\n", "2\n")]),
            ]
        )
        adapter.add("GET", url, FakeResponse(200, html))

        samples_map = TasksPrintPage.fetch(http_client, url, console).extract_samples_map()

        assert set(samples_map) == {ProblemId("C"), ProblemId("D")}
        assert samples_map[ProblemId("C")] == [
            Sample("1", "5\n2 2 3 5 5\n", "2\n"),
            Sample("2", "1\n1\n", "0\n"),
        ]

    def test_old_layout_with_zenkaku_numbers(self):
        statement = parse_html(
            """<div id="task-statement">
            <div class="part"><h3>入力例 １</h3><section><pre>1 2\n</pre></section></div>
            <div class="part"><h3>出力例 １</h3><section><pre>3\n</pre></section></div>
            <div class="part"><h3>入力例 ２</h3><section><pre>5 5\n</pre></section></div>
            </div>"""
        ).select_one("#task-statement")

        assert extract_samples(statement) == [Sample("1", "1 2\n", "3\n")]

    def test_samples_sorted_by_number(self):
        statement = parse_html(
            """<div id="task-statement">
            <h3>Sample Input 2</h3><pre>b</pre><h3>Sample Output 2</h3><pre>B</pre>
            <h3>Sample Input 1</h3><pre>a</pre><h3>Sample Output 1</h3><pre>A</pre>
            </div>"""
        ).select_one("#task-statement")

        assert [s.name for s in extract_samples(statement)] == ["1", "2"]

    def test_other_heading_keeps_pending_sample(self):
        statement = parse_html(
            """<div id="task-statement">
            <h3>Sample Input 1</h3><h3>Note</h3><pre>1 2</pre>
            <h3>Sample Output 1</h3><pre>3</pre>
            </div>"""
        ).select_one("#task-statement")

        assert extract_samples(statement) == [Sample("1", "1 2", "3")]

    def test_no_samples(self):
        statement = parse_html('<div id="task-statement"><h3>Problem</h3><pre>x</pre></div>')
        assert extract_samples(statement.select_one("#task-statement")) == []


class TestSubmitPage:
    def test_language_lookup(self, adapter, http_client, console):
        url = submit_url(ARC100)
        html = submit_html([("4003", "C++14 (GCC 5.4.1)"), ("4006", "Python3 (3.4.3)")])
        adapter.add("GET", url, FakeResponse(200, html))

        page = SubmitPage.fetch(http_client, url, console)

        assert page.extract_lang_id("Python3 (3.4.3)") == "4006"
        assert page.extract_lang_id("Rust (1.15.1)") is None
        assert page.extract_csrf_token() == "abc"
