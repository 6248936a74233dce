"""Server-rendered HTML pages."""

from html import escape

from photoshare.adapters.cloudinary_client import (
    THUMBNAIL_OPTIONS,
    VIEWER_OPTIONS,
    build_display_url,
)
from photoshare.domain.photos import Photo
from photoshare.services.theme import ThemeState

_STYLE = """
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      html.dark body { background: #111827; color: #f3f4f6; }
      header { display: flex; gap: 0.75rem; align-items: center; }
      header h1 { margin-right: auto; }
      .grid { display: grid; gap: 1rem;
              grid-template-columns: repeat(auto-fill, minmax(240px, 1fr)); }
      .card img { width: 100%; border-radius: 0.5rem; }
      .muted { color: #6b7280; }
      .error { color: #dc2626; }
      button { padding: 0.4rem 0.8rem; }
      .viewer img { max-width: 100%; }
      .disabled { pointer-events: none; opacity: 0.4; }
"""


def _page(title: str, theme: ThemeState, body: str) -> str:
    root_class = " ".join(sorted(theme.root_classes))
    return f"""<!doctype html>
<html lang="en" class="{root_class}">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{escape(title)}</title>
    <style>{_STYLE}</style>
  </head>
  <body>
{body}
  </body>
</html>
"""


def format_date(photo: Photo, long: bool = False) -> str:
    """Format a creation date the way the gallery shows it."""
    pattern = "%B %d, %Y" if long else "%b %d, %Y"
    return photo.created_at.strftime(pattern)


def render_login(theme: ThemeState, error: str | None = None) -> str:
    error_html = f'<p class="error">{escape(error)}</p>' if error else ""
    body = f"""    <h1>PhotoShare</h1>
    <form method="post" action="/login">
      <label for="password">Password</label><br />
      <input id="password" name="password" type="password" autofocus />
      <button type="submit">Enter</button>
    </form>
    {error_html}"""
    return _page("PhotoShare", theme, body)


def render_gallery(
    photos: list[Photo],
    theme: ThemeState,
    is_admin: bool,
    error: str | None = None,
) -> str:
    """Render the thumbnail grid with the upload form."""
    admin_link = '<a href="/admin">Admin Panel</a>' if is_admin else ""
    badge = " <small>Admin</small>" if is_admin else ""
    toggle_label = "Light mode" if theme.is_dark() else "Dark mode"
    if error:
        listing = f'    <p class="error">{escape(error)}</p>'
    elif photos:
        cards = "\n".join(_render_card(photo) for photo in photos)
        listing = f"""    <h2>Your Photos ({len(photos)})</h2>
    <div class="grid">
{cards}
    </div>"""
    else:
        listing = '    <p class="muted">No photos yet. Upload the first one!</p>'
    body = f"""    <header>
      <h1>PhotoShare{badge}</h1>
      {admin_link}
      <form method="post" action="/theme"><button>{toggle_label}</button></form>
      <form method="post" action="/logout"><button>Logout</button></form>
    </header>
    <form id="upload" enctype="multipart/form-data">
      <input name="files" type="file" accept="image/*" multiple required />
      <input name="title" type="text" placeholder="Title (optional)" />
      <input name="description" type="text" placeholder="Description (optional)" />
      <button type="submit">Upload</button>
      <span id="upload-status" class="muted"></span>
    </form>
{listing}
    <script>
      document.getElementById('upload').addEventListener('submit', async (e) => {{
        e.preventDefault();
        const form = e.target;
        const status = document.getElementById('upload-status');
        const button = form.querySelector('button');
        button.disabled = true;
        status.textContent = 'Uploading...';
        const res = await fetch('/api/photos', {{
          method: 'POST',
          body: new FormData(form)
        }});
        const data = await res.json();
        button.disabled = false;
        if (data.succeeded) {{
          window.location.reload();
          return;
        }}
        status.textContent = data.message || data.detail || 'Upload failed.';
      }});
    </script>"""
    return _page("PhotoShare", theme, body)


def _render_card(photo: Photo) -> str:
    thumbnail = build_display_url(photo.media_url, THUMBNAIL_OPTIONS)
    description = escape(photo.description) if photo.description else "No description"
    return f"""      <div class="card">
        <a href="/photos/{photo.id}">
          <img src="{escape(thumbnail)}" alt="{escape(photo.title)}" loading="lazy" />
        </a>
        <h3>{escape(photo.title)}</h3>
        <p>{description}</p>
        <p class="muted">{format_date(photo)}</p>
      </div>"""


def render_viewer(
    photo: Photo,
    theme: ThemeState,
    previous: Photo | None,
    following: Photo | None,
) -> str:
    """Render the full-size viewer with boundary-aware navigation."""
    display_url = build_display_url(photo.media_url, VIEWER_OPTIONS)
    description = (
        f"<p>{escape(photo.description)}</p>" if photo.description else ""
    )
    body = f"""    <header>
      <h1>{escape(photo.title)}</h1>
      <a href="/">Close</a>
    </header>
    <div class="viewer">
      <img src="{escape(display_url)}" alt="{escape(photo.title)}" />
    </div>
    {description}
    <p class="muted">{format_date(photo, long=True)}</p>
    <nav>
      {_nav_link(previous, "Previous", "ArrowLeft")}
      {_nav_link(following, "Next", "ArrowRight")}
    </nav>
    <script>
      document.addEventListener('keydown', (e) => {{
        if (e.key === 'Escape') window.location.href = '/';
        const link = document.querySelector(`a[data-key="${{e.key}}"]`);
        if (link) window.location.href = link.href;
      }});
    </script>"""
    return _page(photo.title, theme, body)


def _nav_link(target: Photo | None, label: str, key: str) -> str:
    if target is None:
        return f'<span class="disabled">{label}</span>'
    return f'<a href="/photos/{target.id}" data-key="{key}">{label}</a>'


def render_admin(
    photos: list[Photo], theme: ThemeState, summary: dict[str, int]
) -> str:
    """Render the admin panel that edits and deletes through the admin API."""
    if photos:
        rows = "\n".join(_render_admin_row(photo) for photo in photos)
    else:
        rows = '      <p class="muted">No photos yet.</p>'
    body = f"""    <header>
      <h1>Admin Panel</h1>
      <a href="/">Back to gallery</a>
    </header>
    <p>Total photos: {summary['total_photos']} &middot;
       With description: {summary['described_photos']}</p>
    <div id="photos">
{rows}
    </div>
    <pre id="output" class="muted"></pre>
    <script>
      async function savePhoto(id) {{
        const row = document.getElementById('photo-' + id);
        const res = await fetch('/admin/photos/' + id, {{
          method: 'PUT',
          headers: {{ 'Content-Type': 'application/json' }},
          body: JSON.stringify({{
            title: row.querySelector('[name=title]').value,
            description: row.querySelector('[name=description]').value
          }})
        }});
        await report(res);
      }}
      async function deletePhoto(id) {{
        if (!confirm('Delete this photo? This cannot be undone.')) return;
        const res = await fetch('/admin/photos/' + id, {{ method: 'DELETE' }});
        await report(res);
      }}
      async function report(res) {{
        if (res.ok) {{
          window.location.reload();
          return;
        }}
        const data = await res.json();
        document.getElementById('output').textContent = data.detail || 'Error';
      }}
    </script>"""
    return _page("PhotoShare Admin", theme, body)


def _render_admin_row(photo: Photo) -> str:
    thumbnail = build_display_url(photo.media_url, THUMBNAIL_OPTIONS)
    return f"""      <div class="card" id="photo-{photo.id}">
        <img src="{escape(thumbnail)}" alt="{escape(photo.title)}" width="160" />
        <input name="title" value="{escape(photo.title)}" />
        <input name="description" value="{escape(photo.description or '')}" />
        <span class="muted">{photo.created_at.strftime('%b %d, %Y %H:%M')}</span>
        <button onclick="savePhoto('{photo.id}')">Save</button>
        <button onclick="deletePhoto('{photo.id}')">Delete</button>
      </div>"""
