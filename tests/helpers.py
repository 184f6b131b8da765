"""Test doubles and AtCoder HTML builders shared by the unit tests."""

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict


class FakeResponse:
    """Canned answer for one request."""

    def __init__(self, status=200, text="", headers=None, exc=None):
        self.status = status
        self.text = text
        self.headers = headers or {}
        self.exc = exc


class FakeAdapter(BaseAdapter):
    """Transport adapter answering from a queue of canned responses."""

    def __init__(self):
        super().__init__()
        self.routes = {}
        self.requests = []

    def add(self, method, url, *responses):
        self.routes.setdefault((method, url), []).extend(responses)

    def send(self, request, **kwargs):
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url))
        if not queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        canned = queue.pop(0) if len(queue) > 1 else queue[0]
        if canned.exc is not None:
            raise canned.exc

        response = requests.Response()
        response.status_code = canned.status
        response._content = canned.text.encode("utf-8")
        response._content_consumed = True
        response.encoding = "utf-8"
        response.headers = CaseInsensitiveDict(canned.headers)
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def header_html(user=None, contest_title=None):
    """Navigation bar as rendered by AtCoder."""
    title = f'<a class="contest-title" href="#">{contest_title}</a>' if contest_title else ""
    if user is None:
        menu = '<a class="dropdown-toggle" href="#">Language</a><a href="/login">Sign In</a>'
    else:
        menu = (
            '<a class="dropdown-toggle" href="#">Language</a>'
            f'<a class="dropdown-toggle" href="#"><span class="glyphicon glyphicon-cog"></span> {user}</a>'
        )
    return f'<nav class="navbar">{title}{menu}</nav>'


def login_html(user=None, csrf="abc"):
    return f"""<html><body>{header_html(user)}
    <form method="POST"><input type="hidden" name="csrf_token" value="{csrf}"/></form>
    </body></html>"""


def settings_html(user):
    return f"<html><body>{header_html(user)}<div id='main-container'></div></body></html>"


def tasks_html(contest_title, rows):
    body = "".join(
        f"""<tr>
          <td class="text-center no-break"><a href="/contests/{cid}/tasks/{url_name}">{pid}</a></td>
          <td><a href="/contests/{cid}/tasks/{url_name}">{name}</a></td>
          <td class="text-right">{time_limit}</td>
          <td class="text-right">{memory_limit}</td>
          <td></td>
        </tr>"""
        for cid, pid, url_name, name, time_limit, memory_limit in rows
    )
    return f"""<html><body>{header_html("alice", contest_title)}
    <div id="main-container" class="container">
      <div class="row"><div class="col-sm-12">
        <div class="panel panel-default table-responsive">
          <table class="table table-bordered table-striped">
            <thead><tr><th></th><th>Task Name</th><th>Time Limit</th><th>Memory Limit</th><th></th></tr></thead>
            <tbody>{body}</tbody>
          </table>
        </div>
      </div></div>
    </div></body></html>"""


def statement_html(samples):
    """Current statement layout with both languages."""
    parts = []
    for lang, in_label, out_label in (("ja", "入力例 {}", "出力例 {}"), ("en", "Sample Input {}", "Sample Output {}")):
        sections = "".join(
            f"""<div class="part"><section><h3>{in_label.format(i)}</h3><pre>{inp}</pre></section></div>
            <div class="part"><section><h3>{out_label.format(i)}</h3><pre>{out}</pre></section></div>"""
            for i, (inp, out) in enumerate(samples, start=1)
        )
        parts.append(f'<span class="lang-{lang}">{sections}</span>')
    return f'<div id="task-statement"><span class="lang">{"".join(parts)}</span></div>'


def tasks_print_html(problems):
    blocks = "".join(
        f"""<div class="col-sm-12">
          <span class="h2">{pid} - {name}</span>
          {statement_html(samples)}
        </div>"""
        for pid, name, samples in problems
    )
    return f"""<html><body>
    <div id="main-container" class="container">
      <div class="row">{blocks}<div class="col-sm-12 next-page"></div></div>
    </div></body></html>"""


def submit_html(options, csrf="abc"):
    opts = "".join(f'<option value="{value}">{name}</option>' for value, name in options)
    return f"""<html><body>{header_html("alice")}
    <form>
      <input type="hidden" name="csrf_token" value="{csrf}"/>
      <div id="select-lang"><select class="form-control">{opts}</select></div>
    </form></body></html>"""


def alert_html(message):
    return f'<html><body><div class="alert alert-danger">{message}</div></body></html>'
