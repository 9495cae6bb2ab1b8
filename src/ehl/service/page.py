"""Single-page browser UI served at GET /."""

from __future__ import annotations

import json
from html import escape

from ehl.config import THRESHOLD_STEP
from ehl.highlight.render import render_empty_html

_PAGE = """\
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Entity Highlighter</title>
  <style>
    body {{ font-family: system-ui, sans-serif; max-width: 860px; margin: 2rem auto; color: #1b1a17; }}
    textarea {{ width: 100%; font-size: 1rem; }}
    .ehl-entity {{ padding: 0.2em 0.4em; margin: 0 0.1em; border-radius: 0.3em; font-weight: 500; }}
    .ehl-badge {{ display: inline-block; padding: 0.1em 0.6em; margin: 0 0.3em 0.3em 0;
                  border-radius: 0.6em; border: 1px solid #ddd; font-size: 0.85rem; }}
    .ehl-empty {{ color: #777; }}
    #notice {{ min-height: 1.5em; font-size: 0.9rem; }}
    #notice.destructive {{ color: #b00020; }}
    #output {{ border: 1px solid #ddd; border-radius: 6px; padding: 1rem; line-height: 1.7; }}
  </style>
</head>
<body>
  <h1>Entity Highlighter</h1>
  <p>Paste your text below to identify and highlight named entities.</p>

  <label for="text-input"><strong>Your Text</strong></label>
  <textarea id="text-input" rows="10" placeholder="Paste or type your text here..."></textarea>

  <p>
    <label for="confidence-slider"><strong>Confidence Threshold:</strong>
      <code id="threshold-value">{threshold:.2f}</code></label><br>
    <input id="confidence-slider" type="range" min="0" max="1" step="{step}" value="{threshold}">
    <br><small>Only entities with confidence scores greater than or equal to this value
    will be highlighted.</small>
  </p>
  <button id="analyze">Analyze Text &amp; Highlight Entities</button>

  <h2>Highlighted Entities</h2>
  <div id="notice"></div>
  <div id="legend"></div>
  <div id="output">{empty}</div>

  <script>
    const slider = document.getElementById("confidence-slider");
    const button = document.getElementById("analyze");
    const notice = document.getElementById("notice");
    slider.addEventListener("input", () => {{
      document.getElementById("threshold-value").textContent = Number(slider.value).toFixed(2);
    }});
    function showNotice(n) {{
      if (!n || typeof n.title !== "string") {{
        n = {{title: "Error", description: "The request could not be processed.", variant: "destructive"}};
      }}
      notice.textContent = n.title + ": " + n.description;
      notice.className = n.variant;
    }}
    button.addEventListener("click", async () => {{
      button.disabled = true;
      button.textContent = "Analyzing...";
      try {{
        const resp = await fetch("/analyze", {{
          method: "POST",
          headers: {{"Content-Type": "application/json"}},
          body: JSON.stringify({{
            text: document.getElementById("text-input").value,
            confidence_threshold: Number(slider.value),
          }}),
        }});
        const data = await resp.json();
        if (resp.ok) {{
          document.getElementById("legend").innerHTML = data.legend_html;
          document.getElementById("output").innerHTML = data.html;
          showNotice(data.notice);
        }} else {{
          if (resp.status === 502) {{
            document.getElementById("legend").innerHTML = "";
            document.getElementById("output").innerHTML =
              (data.detail && data.detail.html) || {empty_js};
          }}
          showNotice(data.detail);
        }}
      }} finally {{
        button.disabled = false;
        button.textContent = "Analyze Text & Highlight Entities";
      }}
    }});
  </script>
</body>
</html>
"""


def render_page(threshold: float) -> str:
    return _PAGE.format(
        threshold=threshold,
        step=escape(str(THRESHOLD_STEP)),
        empty=render_empty_html(),
        empty_js=json.dumps(render_empty_html()),
    )
