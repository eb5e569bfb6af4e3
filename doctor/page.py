from __future__ import annotations

import html
import json

from doctor.contracts.diagnostics import Report

_FORM = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>NFT Doctor</title>
</head>
<body>
<h1>NFT Doctor</h1>
<p>Checks an NFT asset-chain API against known mint, send, receive and atomic swap histories.</p>
<form method="post" action="/">
<label for="url">API base URL</label>
<input type="text" id="url" name="url" size="60" value="{default_url}">
<input type="submit" value="Diagnose">
</form>
"""


def form_page(default_url: str) -> str:
    return _FORM.format(default_url=html.escape(default_url, quote=True))


def progress_line(line: str) -> str:
    return html.escape(line) + "<br>"


def report_block(report: Report) -> str:
    """
    Report as 4-space indented JSON, one <br> per line so browsers keep the layout.
    """
    text = json.dumps(report.to_dict(), indent=4)
    return "<hr><p>" + "\n<br>\n".join(html.escape(line) for line in text.split("\n")) + "</p>"
