"""Root page with a minimal parse form."""

from __future__ import annotations

import time

from fastapi import APIRouter  # type: ignore[import-not-found]
from fastapi.responses import HTMLResponse  # type: ignore[import-not-found]

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

PAGE = """<!DOCTYPE html>
<html lang="zh-CN">
<head><meta charset="utf-8"><title>微信公众号文章解析</title></head>
<body>
<form id="parse-form">
<input id="url" name="url" type="url" placeholder="https://mp.weixin.qq.com/s/..."/>
<button type="submit">解析</button>
</form>
<h1 id="title"></h1>
<div id="content"></div>
<script>
document.getElementById("parse-form").addEventListener("submit", async (e) => {
  e.preventDefault();
  const res = await fetch("/api/wechat/parse", {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({url: document.getElementById("url").value}),
  });
  const body = await res.json();
  if (body.success) {
    document.getElementById("title").textContent = body.data.title;
    document.getElementById("content").innerHTML = body.data.content;
  } else {
    document.getElementById("title").textContent = body.error;
  }
});
</script>
</body>
</html>
"""


@router.get("/")
async def index() -> HTMLResponse:
    """Render the parse form with caching disabled."""

    # Timestamp headers make stale pages easy to spot while debugging.
    now = str(int(time.time() * 1000))
    headers = {
        **NO_CACHE_HEADERS,
        "X-Timestamp": now,
        "X-Cache-Buster": f"v{now}",
    }
    return HTMLResponse(PAGE, headers=headers)
