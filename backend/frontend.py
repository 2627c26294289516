"""Single-page browser frontend served at / and as the HTML fallback."""

INDEX_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <title>Instance Items Demo</title>
  <style>
    body { font-family: system-ui, -apple-system, "Segoe UI", Roboto, sans-serif; padding: 20px; }
    input { padding: 8px; font-size: 14px; }
    button { padding: 8px 12px; margin-left: 8px; }
    pre { background: #f5f5f5; padding: 10px; border-radius: 6px; }
    .instance { color: #444; font-weight: 600; }
  </style>
</head>
<body>
  <h1>Instance Items Demo</h1>
  <p>Answered by instance: <span class="instance" id="instance">loading...</span></p>

  <section>
    <h2>/api/hello</h2>
    <pre id="hello">loading...</pre>
  </section>

  <section>
    <h2>Items</h2>
    <ul id="items"></ul>
    <form id="add-form" style="margin-top:10px;">
      <input id="text" placeholder="New item text" autocomplete="off"/>
      <button type="submit">Add</button>
    </form>
  </section>

  <script>
    async function loadHello() {
      try {
        const resp = await fetch('/api/hello');
        const body = await resp.json();
        document.getElementById('hello').textContent = JSON.stringify(body, null, 2);
        document.getElementById('instance').textContent = body.instance || 'unknown';
      } catch (err) {
        document.getElementById('hello').textContent = 'fetch error: ' + err;
      }
    }

    async function loadItems() {
      try {
        const resp = await fetch('/api/items');
        const items = await resp.json();
        const list = document.getElementById('items');
        list.innerHTML = '';
        for (const item of items) {
          const li = document.createElement('li');
          li.textContent = '#' + item.id + ' ' + item.text + ' (' + new Date(item.created).toLocaleString() + ')';
          list.appendChild(li);
        }
      } catch (err) {
        console.error(err);
      }
    }

    async function addItem(event) {
      event.preventDefault();
      const input = document.getElementById('text');
      const text = input.value.trim();
      if (!text) return;
      try {
        const resp = await fetch('/api/items', {
          method: 'POST',
          headers: {'Content-Type': 'application/json'},
          body: JSON.stringify({text: text})
        });
        if (resp.status === 201) {
          input.value = '';
          await loadItems();
        } else {
          const body = await resp.json().catch(() => ({}));
          alert('Error: ' + (body.error || resp.status));
        }
      } catch (err) {
        alert('Network error: ' + err);
      }
    }

    document.getElementById('add-form').addEventListener('submit', addItem);
    loadHello();
    loadItems();
    // keep polling so load-balanced instance switches are visible
    setInterval(loadHello, 2000);
  </script>
</body>
</html>
"""
