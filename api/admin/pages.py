"""
Static HTML for the home and admin pages.
"""

from __future__ import annotations

HOME_PAGE = """
<h1>Sonido Sigiloso</h1>
<ul>
  <li><a href="/health">Health</a></li>
  <li><a href="/admin">Admin</a></li>
  <li><a href="/articles">Articles</a></li>
</ul>
"""

# Optional inputs may be left blank; they are stored as NULL.
ADMIN_PAGE = """
<h1>Admin</h1>
<p>Use these forms to insert records quickly.</p>

<h2>Album</h2>
<form action="/admin/albums" method="post">
  <input name="title" placeholder="title" required />
  <input name="artist_id" placeholder="artist_id (optional)" />
  <input name="release_year" placeholder="release_year (optional)" />
  <input name="label" placeholder="label (optional)" />
  <input name="format" placeholder="format (optional)" />
  <input name="country" placeholder="country (optional)" />
  <input name="genre" placeholder="genre (optional)" />
  <input name="style" placeholder="style (optional)" />
  <input name="created_at" placeholder="created_at (YYYY-MM-DDTHH:MM:SSZ)" required />
  <button type="submit">Create album</button>
</form>

<h2>Track</h2>
<form action="/admin/tracks" method="post">
  <input name="title" placeholder="title" required />
  <input name="artist_name" placeholder="artist_name" required />
  <input name="album_id" placeholder="album_id (optional)" />
  <input name="entrega_id" placeholder="entrega_id (optional)" />
  <input name="position" placeholder="position e.g. A1 (optional)" />
  <input name="duration_seconds" placeholder="duration_seconds (optional)" />
  <input name="bpm" placeholder="bpm (optional)" />
  <input name="tone" placeholder="tone A-G (optional)" />
  <input name="score" placeholder="score (optional)" />
  <input name="created_at" placeholder="created_at (YYYY-MM-DDTHH:MM:SSZ)" required />
  <button type="submit">Create track</button>
</form>

<h2>Batch</h2>
<form action="/admin/batches" method="post">
  <input name="name" placeholder="name" required />
  <input name="created_at" placeholder="created_at (YYYY-MM-DDTHH:MM:SSZ)" required />
  <button type="submit">Create batch</button>
</form>

<h2>Entrega</h2>
<form action="/admin/entregas" method="post">
  <input name="name" placeholder="name" required />
  <input name="batch_id" placeholder="batch_id (optional)" />
  <input name="created_at" placeholder="created_at (YYYY-MM-DDTHH:MM:SSZ)" required />
  <button type="submit">Create entrega</button>
</form>
"""
