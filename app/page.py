# app/page.py
from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["page"])

PAGE_TITLE = "Daily Romance"

PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>__TITLE__</title>
  <style>
    body { margin: 0; background: #fff; color: #111; font-family: system-ui, sans-serif; }
    main { min-height: 100vh; }
    .center { min-height: 100vh; display: flex; align-items: center; justify-content: center;
              text-align: center; padding: 16px; box-sizing: border-box; }
    .pulse { width: 64px; height: 64px; border-radius: 50%; background: #e5e5e5; margin: 0 auto 16px;
             animation: pulse 1.5s ease-in-out infinite; }
    @keyframes pulse { 50% { opacity: .4; } }
    .muted { color: #6b7280; font-size: 0.9em; }
    .wrap { max-width: 960px; margin: 0 auto; padding: 48px 16px; }
    h1 { font-weight: 300; font-size: clamp(2rem, 5vw, 3rem); text-align: center; margin: 0 0 8px; }
    figure { margin: 48px 0; aspect-ratio: 16 / 10; overflow: hidden; border-radius: 16px;
             box-shadow: 0 2px 12px rgba(0,0,0,0.06); }
    figure img { width: 100%; height: 100%; object-fit: cover; transition: transform .7s; }
    figure:hover img { transform: scale(1.05); }
    blockquote { font-weight: 300; font-size: clamp(1.25rem, 3vw, 2.25rem); line-height: 1.5;
                 text-align: center; max-width: 768px; margin: 0 auto; }
    footer { text-align: center; margin-top: 96px; color: #9ca3af; font-size: 0.85em; }
    button { background: #000; color: #fff; border: 0; border-radius: 999px; padding: 8px 24px;
             cursor: pointer; }
    button:hover { background: #1f2937; }
    [hidden] { display: none !important; }
  </style>
</head>
<body>
<main>
  <div id="state-loading" class="center">
    <div><div class="pulse"></div><p class="muted">Loading...</p></div>
  </div>

  <div id="state-error" class="center" hidden>
    <div>
      <div style="font-size: 2.5rem; color: #9ca3af;">&#9888;</div>
      <h2>Something went wrong</h2>
      <p id="error-message" class="muted"></p>
      <button id="retry" type="button">Try Again</button>
    </div>
  </div>

  <div id="state-ready" class="wrap" hidden>
    <h1>__TITLE__</h1>
    <p id="today" class="muted" style="text-align:center"></p>
    <figure><img id="daily-image" alt="" /></figure>
    <blockquote id="daily-quote"></blockquote>
    <footer>A new romance awaits tomorrow</footer>
  </div>
</main>

<script>
function show(state) {
  for (const s of ['loading', 'error', 'ready']) {
    document.getElementById('state-' + s).hidden = (s !== state);
  }
}

function formatDate(iso) {
  // iso is YYYY-MM-DD (UTC); pin to noon so local offsets cannot shift the day
  const d = new Date(iso + 'T12:00:00Z');
  return d.toLocaleDateString('en-US', {
    weekday: 'long', year: 'numeric', month: 'long', day: 'numeric'
  });
}

async function load() {
  show('loading');
  try {
    const [imageResponse, quoteResponse] = await Promise.all([
      fetch('/api/image'),
      fetch('/api/quote')
    ]);
    if (!imageResponse.ok) throw new Error('Failed to fetch image');
    if (!quoteResponse.ok) throw new Error('Failed to fetch quote');

    const image = await imageResponse.json();
    const quote = await quoteResponse.json();

    document.getElementById('today').textContent = formatDate(image.date);
    const img = document.getElementById('daily-image');
    img.src = image.url;
    img.alt = image.name;
    document.getElementById('daily-quote').textContent = '\\u201c' + quote.quote + '\\u201d';
    show('ready');
  } catch (err) {
    document.getElementById('error-message').textContent =
      (err && err.message) ? err.message : 'An error occurred';
    show('error');
  }
}

document.getElementById('retry').addEventListener('click', () => window.location.reload());
load();
</script>
</body>
</html>
"""


def render_page(title: str = PAGE_TITLE) -> str:
    return PAGE_HTML.replace("__TITLE__", title)


@router.get("/", response_class=HTMLResponse)
def index():
    return HTMLResponse(content=render_page(), status_code=200)
