"""Search form served at the site root.

A single static page: the form posts JSON to /api/recommendations and renders
the returned flowers as cards, or the error message the API sent back.
"""

import html

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from flora_search.flowers.models import FILTER_OPTIONS, storage_key

router = APIRouter(tags=["UI"])


def _label(attribute: str) -> str:
    return attribute.replace("_", " ").capitalize()


def render_filter_controls() -> str:
    """One labelled <select> per filter, with an empty "any" choice first."""
    controls = []
    for attribute, options in FILTER_OPTIONS.items():
        name = storage_key(attribute)
        label = _label(attribute)
        opts = f'<option value="">Select {html.escape(label.lower())}...</option>' + "".join(
            f'<option value="{html.escape(value)}">{html.escape(text)}</option>'
            for value, text in options
        )
        controls.append(
            f'<label>{html.escape(label)}<select name="{name}">{opts}</select></label>'
        )
    return "\n".join(controls)


HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Flower Recommender</title>
<style>
body { font-family: system-ui, sans-serif; max-width: 960px; margin: 2rem auto; padding: 0 1rem; }
form .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; }
label { display: flex; flex-direction: column; font-size: .9rem; font-weight: 600; gap: .3rem; }
input, select { padding: .5rem; border: 1px solid #ccc; border-radius: 4px; font-weight: normal; }
.actions { display: flex; gap: 1rem; margin: 1.5rem 0; }
.actions button[type=submit] { flex: 1; background: #3b82f6; color: #fff; border: 0; padding: .6rem; border-radius: 4px; }
.actions button:disabled { background: #d1d5db; }
#error { color: #ef4444; }
#results { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; }
.card { border: 1px solid #ddd; border-radius: 8px; padding: 1rem; }
.card img { max-width: 100%; border-radius: 4px; }
.card .sci { font-style: italic; color: #555; }
.card .meta { font-size: .85rem; color: #555; }
</style>
</head>
<body>
<h1>Flower Recommender</h1>
<form id="search">
  <div class="grid">
    <label>Search query
      <input type="text" name="searchQuery" placeholder="e.g., red flowers, shade loving, drought resistant...">
    </label>
    {{FILTER_CONTROLS}}
  </div>
  <div class="actions">
    <button type="submit" disabled>Find Flowers</button>
    <button type="reset">Reset</button>
  </div>
</form>
<div id="error"></div>
<div id="results"></div>
<script>
const COLORS = {red: "#fef2f2", crimson: "#fef2f2", pink: "#fdf2f8", magenta: "#fdf2f8",
  purple: "#faf5ff", violet: "#faf5ff", lavender: "#faf5ff", blue: "#eff6ff",
  yellow: "#fefce8", gold: "#fefce8", orange: "#fff7ed", coral: "#fff7ed",
  white: "#f9fafb", silver: "#f3f4f6"};
const form = document.getElementById("search");
const submit = form.querySelector("button[type=submit]");
const errorBox = document.getElementById("error");
const results = document.getElementById("results");

function criteria() {
  const data = {};
  for (const [key, value] of new FormData(form)) {
    if (value.trim() !== "") data[key] = value;
  }
  return data;
}
function background(description) {
  const text = (description || "").toLowerCase();
  for (const [color, bg] of Object.entries(COLORS)) {
    if (text.includes(color)) return bg;
  }
  return "#f0fdf4";
}
function line(label, value) {
  const p = document.createElement("p");
  p.textContent = label + ": " + value;
  return p;
}
function card(flower) {
  const div = document.createElement("div");
  div.className = "card";
  div.style.background = background(flower.description);
  if (flower.imageUrl) {
    const img = document.createElement("img");
    img.src = flower.imageUrl;
    img.alt = flower.name;
    div.append(img);
  }
  const h3 = document.createElement("h3");
  h3.textContent = flower.name;
  const sci = document.createElement("p");
  sci.className = "sci";
  sci.textContent = flower.scientificName;
  const desc = document.createElement("p");
  desc.textContent = flower.description;
  const meta = document.createElement("div");
  meta.className = "meta";
  meta.append(
    line("Climate", flower.climate.join(", ")),
    line("Sun Exposure", flower.sunExposure),
    line("Watering Needs", flower.wateringNeeds),
    line("Soil Type", flower.soilType),
    line("Blooming Season", flower.bloomingSeason.join(", ")),
    line("Hardiness Zones", flower.hardiness),
  );
  div.append(h3, sci, desc, meta);
  return div;
}

form.addEventListener("input", () => { submit.disabled = Object.keys(criteria()).length === 0; });
form.addEventListener("reset", () => {
  errorBox.textContent = "";
  results.replaceChildren();
  submit.disabled = true;
});
form.addEventListener("submit", async (event) => {
  event.preventDefault();
  errorBox.textContent = "";
  results.replaceChildren();
  submit.disabled = true;
  submit.textContent = "Finding flowers...";
  try {
    const response = await fetch("/api/recommendations", {
      method: "POST",
      headers: {"Content-Type": "application/json"},
      body: JSON.stringify(criteria()),
    });
    const data = await response.json();
    if (!response.ok) throw new Error(data.error || "Failed to get recommendations");
    results.append(...data.map(card));
  } catch (err) {
    errorBox.textContent = err.message || "An error occurred";
  } finally {
    submit.textContent = "Find Flowers";
    submit.disabled = Object.keys(criteria()).length === 0;
  }
});
</script>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home() -> str:
    """Serve the search form."""
    return HTML_TEMPLATE.replace("{{FILTER_CONTROLS}}", render_filter_controls())
