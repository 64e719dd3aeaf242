"""Mock of the create-transport-request wizard for harness tests.

Serves a single page that mimics the wizard's DOM conventions (step tabs
with an ``active`` class, ``.draggable`` waypoint containers, multiselect
dropdowns with ``...-multiselect-option-<CODE>`` ids, label/validation
message siblings) plus the REST endpoints the wizard talks to:

- POST /api/v1/transport-requests/validate/: 400 with per-waypoint
  ``contactEmail`` errors when an email is malformed, else 200
- POST /api/v1/transport-requests/: 200 ``{"auctions": [id]}``
- DELETE /api/v1/auctions/<id>/?includeMerged=false: 204, or 404 if unknown

State lives on the app instance (``app.mock_state``), never at module level.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List

from flask import Flask, Response, jsonify, request

EMAIL_ERROR = "Enter a valid email address."
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9._%+-]+@(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
)

COUNTRIES = [
    ("SK", "Slovakia"),
    ("CZ", "Czechia"),
    ("AT", "Austria"),
    ("DE", "Germany"),
    ("PL", "Poland"),
    ("HU", "Hungary"),
]
# Rendered with display: none; must never be picked.
HIDDEN_COUNTRY = ("ZZ", "Atlantis")

CARRIER_IDS = ("6401", "6402")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def waypoint_errors(waypoints: List[Dict[str, Any]]) -> List[Dict[str, List[str]]]:
    errors: List[Dict[str, List[str]]] = []
    for waypoint in waypoints:
        email = (waypoint.get("contactEmail") or "").strip()
        if email and not is_valid_email(email):
            errors.append({"contactEmail": [EMAIL_ERROR]})
        else:
            errors.append({})
    return errors


def create_mock_wizard_app() -> Flask:
    """Create the mock wizard Flask app with fresh in-memory state."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    state: Dict[str, Any] = {"next_id": 1000, "auctions": set(), "requests": [], "deleted": []}
    app.mock_state = state

    @app.route("/request/create", methods=["GET"])
    def create_request_page():
        return Response(WIZARD_HTML, mimetype="text/html")

    @app.route("/api/v1/transport-requests/validate/", methods=["POST"])
    def validate_transport_request():
        data = request.get_json(silent=True) or {}
        errors = waypoint_errors(data.get("waypoints") or [])
        if any(errors):
            return jsonify({"waypoints": errors}), 400
        return jsonify({"valid": True}), 200

    @app.route("/api/v1/transport-requests/", methods=["POST"])
    def create_transport_request():
        data = request.get_json(silent=True) or {}
        waypoints = data.get("waypoints") or []
        errors = waypoint_errors(waypoints)
        if not waypoints or any(errors):
            return jsonify({"waypoints": errors or [{"non_field_errors": ["At least one waypoint is required."]}]}), 400
        if not data.get("carriers"):
            return jsonify({"carriers": ["Select at least one carrier."]}), 400

        auction_id = state["next_id"]
        state["next_id"] += 1
        state["auctions"].add(auction_id)
        state["requests"].append(data)
        return jsonify({"auctions": [auction_id]}), 200

    @app.route("/api/v1/auctions/<int:auction_id>/", methods=["DELETE"])
    def delete_auction(auction_id: int):
        if request.args.get("includeMerged") != "false" or auction_id not in state["auctions"]:
            return jsonify({"detail": "Not found."}), 404
        state["auctions"].discard(auction_id)
        state["deleted"].append(auction_id)
        return Response(status=204)

    return app


_COUNTRIES_JS = ", ".join(f'["{code}", "{name}"]' for code, name in COUNTRIES)
_CARRIERS_HTML = "\n".join(
    f'<label><input type="checkbox" class="carrier" id="{carrier_id}" value="{carrier_id}"> Carrier {carrier_id}</label>'
    for carrier_id in CARRIER_IDS
)

WIZARD_HTML = r"""<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>Create transport request</title>
<style>
  .step-panel { display: none; }
  .step-panel.active { display: block; }
  .multiselect-dropdown { display: none; list-style: none; margin: 0; padding: 0; }
  .multiselect-dropdown.open { display: block; }
  .error-message:empty { display: none; }
  .field { margin: 4px 0; }
</style>
</head>
<body>
<nav class="steps">
  <button type="button" id="button-step-Waypoints" class="step-tab active" data-step="waypoints">Waypoints</button>
  <button type="button" id="button-step-Cargo info" class="step-tab" data-step="cargo">Cargo info</button>
  <button type="button" id="button-step-Carriers" class="step-tab" data-step="carriers">Carriers</button>
  <button type="button" id="button-step-Review" class="step-tab" data-step="review">Review</button>
</nav>

<section id="step-waypoints" class="step-panel active">
  <div class="route-type">
    <label><input type="radio" name="routeType" value="ONE_WAY" checked> One way</label>
    <label><input type="radio" name="routeType" value="ROUND_TRIP"> Round trip</label>
  </div>
  <div class="transport-modes">
    <button type="button" class="mode" data-mode="road"><i class="fa fa-road"></i> Road</button>
    <button type="button" class="mode" data-mode="plane"><i class="fa fa-plane"></i> Air</button>
    <button type="button" class="mode" data-mode="ship"><i class="fa fa-ship"></i> Sea</button>
    <button type="button" class="mode" data-mode="train"><i class="fa fa-train"></i> Rail</button>
    <button type="button" class="mode" data-mode="truck-plane"><i class="fa fa-truck-plane"></i> Combined</button>
  </div>
  <div id="waypoint-list"></div>
  <button type="button" id="add-waypoint">Add waypoint</button>
</section>

<section id="step-cargo" class="step-panel">
  <div class="field"><label class="form-label d-block" for="cargo.value">Cargo value</label>
    <div class="control"><input type="text" id="cargo.value"></div></div>
  <div class="field"><label class="form-label d-block" for="cargo.maxLength">Max length</label>
    <div class="control"><input type="text" id="cargo.maxLength"></div></div>
  <div class="field"><label class="form-label d-block" for="cargo.weight">Weight</label>
    <div class="control"><input type="text" id="cargo.weight"></div></div>
  <div class="field"><label class="form-label d-block" for="cargo.description">Description</label>
    <div class="control"><input type="text" id="cargo.description"></div></div>
  <div id="cargo-selects"></div>
  <div class="field"><label class="form-label d-block" for="reference">Reference</label>
    <div class="control"><input type="text" id="reference"></div></div>
  <div class="field"><label class="form-label d-block" for="costCenter">Cost center</label>
    <div class="control"><input type="text" id="costCenter"></div></div>
</section>

<section id="step-carriers" class="step-panel">
__CARRIERS__
</section>

<section id="step-review" class="step-panel">
  <div class="review-tabs">
    <button type="button" id="tab-request-route" class="review-tab active">Route</button>
    <button type="button" id="tab-request-cargo" class="review-tab">Cargo</button>
  </div>
  <div class="waypoints"></div>
  <div id="cargo-info"></div>
  <div id="form-review"></div>
  <button type="button" id="send-request" disabled>Send request</button>
  <p id="submit-status"></p>
</section>

<footer><button type="button" id="continue">Continue</button></footer>

<script>
const COUNTRIES = [__COUNTRIES__];
const HIDDEN_COUNTRY = ["__HIDDEN_CODE__", "__HIDDEN_NAME__"];
const CARGO_SELECTS = [
  ["cargo.specialRequirements", "Special requirements", [["ADR", "Dangerous goods"], ["TEMP", "Temperature controlled"], ["NONE", "No special handling"]]],
  ["cargo.type", "Cargo type", [["PALLET", "Pallet"], ["BULK", "Bulk"], ["CONTAINER", "Container"]]],
  ["cargo.loadType", "Load type", [["FTL", "Full truck load"], ["LTL", "Part load"]]],
  ["cargo.maxLengthUnit", "Length unit", [["M", "metres"], ["CM", "centimetres"]]],
  ["cargo.weightUnit", "Weight unit", [["KG", "kilograms"], ["T", "tonnes"]]],
];
const ORDER = ["waypoints", "cargo", "carriers", "review"];
let current = "waypoints";

function textField(i, name, label, required) {
  const id = `waypoints[${i}].${name}`;
  return `<div class="field">
    <label class="form-label d-block${required ? " required" : ""}" for="${id}">${label}</label>
    <div class="control"><input type="text" id="${id}"><span class="error-message"></span></div>
    <div class="validation-message"><p style="display: none;">This field is required.</p></div>
  </div>`;
}

function dateField(i, name, label) {
  const id = `waypoints[${i}].${name}`;
  return `<div class="field">
    <label class="form-label d-block" for="${id}">${label}</label>
    <div class="dp__main"><input type="text" class="dp__input" data-field="${name}" placeholder="dd.mm.yyyy hh:mm">
      <button type="button" class="dp__action_button dp__action_cancel">Close</button></div>
  </div>`;
}

function countryField(i) {
  const id = `waypoints[${i}].country`;
  const option = (code, name, hidden) =>
    `<li class="multiselect-option" id="${id}-multiselect-option-${code}" aria-label="${name}" data-code="${code}"${hidden ? ' style="display: none;"' : ""}><span>${name}</span><br><small>${code}</small></li>`;
  const options = COUNTRIES.map(([code, name]) => option(code, name, false)).join("")
    + option(HIDDEN_COUNTRY[0], HIDDEN_COUNTRY[1], true);
  return `<div class="field">
    <label class="form-label d-block required" for="${id}">Country</label>
    <div class="control multiselect country-select"><input type="text" id="${id}" class="country-input" readonly placeholder="Select country">
      <ul class="multiselect-dropdown">${options}</ul><span class="error-message"></span></div>
    <div class="validation-message"><p style="display: none;">This field is required.</p></div>
  </div>`;
}

function containerHtml(i) {
  return `<div class="draggable">
    <div class="point-type">
      <label><input type="radio" name="waypoints[${i}].type" value="PICKUP"> Pickup point</label>
      <label><input type="radio" name="waypoints[${i}].type" value="DELIVERY"> Delivery point</label>
    </div>
    ${dateField(i, "availabilityStart", "Earliest availability")}
    ${dateField(i, "availabilityEnd", "Latest availability")}
    ${textField(i, "name", "Company name", false)}
    ${textField(i, "street", "Street", false)}
    ${textField(i, "city", "City", true)}
    ${textField(i, "postCode", "Post code", false)}
    ${countryField(i)}
    ${textField(i, "contactName", "Contact name", false)}
    ${textField(i, "contactEmail", "Contact email", false)}
    ${textField(i, "contactPhone", "Contact phone", false)}
    ${textField(i, "reference", "Waypoint reference", false)}
    <button type="button" class="remove-waypoint">Remove</button>
  </div>`;
}

function containers() {
  return Array.from(document.querySelectorAll("#waypoint-list .draggable"));
}

function addContainer() {
  document.getElementById("waypoint-list").insertAdjacentHTML("beforeend", containerHtml(containers().length));
}

function reindex() {
  containers().forEach((container, position) => {
    container.querySelectorAll("[id], [for], [name]").forEach((el) => {
      ["id", "for", "name"].forEach((attr) => {
        const value = el.getAttribute(attr);
        if (value) el.setAttribute(attr, value.replace(/waypoints\[\d+\]/, `waypoints[${position}]`));
      });
    });
  });
}

function renderCargoSelects() {
  document.getElementById("cargo-selects").innerHTML = CARGO_SELECTS.map(([id, label, options]) => `
    <div class="field"><label class="form-label d-block" for="${id}">${label}</label>
      <div id="${id}" class="multiselect cargo-select"><div class="multiselect-wrapper"><span class="multiselect-placeholder">Select</span></div>
        <ul id="${id}-dropdown" class="multiselect-dropdown">${options.map(([code, name]) =>
          `<li role="option" class="multiselect-option" id="${id}-multiselect-option-${code}"><span>${name}</span><br><small>${code}</small></li>`).join("")}</ul>
      </div></div>`).join("");
}

function closeDropdowns() {
  document.querySelectorAll(".multiselect-dropdown.open").forEach((ul) => ul.classList.remove("open"));
}

function valueOf(id) {
  const el = document.getElementById(id);
  return el ? el.value.trim() : "";
}

function collectWaypoints() {
  return containers().map((container, i) => {
    const checked = container.querySelector(`input[name="waypoints[${i}].type"]:checked`);
    const date = (name) => container.querySelector(`input[data-field="${name}"]`).value.trim();
    const country = document.getElementById(`waypoints[${i}].country`);
    return {
      type: checked ? checked.value : "",
      availabilityStart: date("availabilityStart"),
      availabilityEnd: date("availabilityEnd"),
      name: valueOf(`waypoints[${i}].name`),
      street: valueOf(`waypoints[${i}].street`),
      city: valueOf(`waypoints[${i}].city`),
      postCode: valueOf(`waypoints[${i}].postCode`),
      country: country.dataset.code || "",
      contactName: valueOf(`waypoints[${i}].contactName`),
      contactEmail: valueOf(`waypoints[${i}].contactEmail`),
      contactPhone: valueOf(`waypoints[${i}].contactPhone`),
      reference: valueOf(`waypoints[${i}].reference`),
    };
  });
}

function collectCargo() {
  const cargo = {
    value: valueOf("cargo.value"),
    maxLength: valueOf("cargo.maxLength"),
    weight: valueOf("cargo.weight"),
    description: valueOf("cargo.description"),
  };
  CARGO_SELECTS.forEach(([id]) => { cargo[id] = document.getElementById(id).dataset.label || ""; });
  return cargo;
}

function selectedCarriers() {
  return Array.from(document.querySelectorAll(".carrier:checked")).map((el) => el.value);
}

function appendLines(parent, values) {
  values.filter((v) => v).forEach((value) => {
    const div = document.createElement("div");
    div.textContent = value;
    parent.appendChild(div);
  });
}

function renderReview() {
  const route = document.querySelector("#step-review .waypoints");
  route.innerHTML = "";
  collectWaypoints().forEach((w) => {
    const block = document.createElement("div");
    block.className = "pb-3";
    const pointType = w.type === "PICKUP" ? "Pickup" : (w.type === "DELIVERY" ? "Delivery" : "");
    appendLines(block, [pointType, w.availabilityStart, w.availabilityEnd, w.name, w.street, w.city,
      w.postCode, w.country, w.contactName, w.contactEmail, w.contactPhone, w.reference]);
    route.appendChild(block);
  });
  const cargoInfo = document.getElementById("cargo-info");
  cargoInfo.innerHTML = "<h4>Cargo</h4>";
  appendLines(cargoInfo, Object.values(collectCargo()));
  const review = document.getElementById("form-review");
  review.innerHTML = "<h4>Request details</h4>";
  appendLines(review, [valueOf("reference"), valueOf("costCenter")]);
  updateSendButton();
}

function updateSendButton() {
  document.getElementById("send-request").disabled = selectedCarriers().length === 0;
}

function activate(step) {
  current = step;
  document.querySelectorAll(".step-tab").forEach((tab) => tab.classList.toggle("active", tab.dataset.step === step));
  document.querySelectorAll(".step-panel").forEach((panel) => panel.classList.toggle("active", panel.id === `step-${step}`));
  document.getElementById("continue").style.display = step === "review" ? "none" : "";
  if (step === "review") renderReview();
}

async function validateWaypoints() {
  let missing = false;
  document.querySelectorAll("#waypoint-list label.required").forEach((label) => {
    const input = document.getElementById(label.getAttribute("for"));
    const message = label.parentElement.querySelector(".validation-message p");
    if (!input || !input.value.trim()) {
      message.removeAttribute("style");
      missing = true;
    } else {
      message.setAttribute("style", "display: none;");
    }
  });
  document.querySelectorAll("#waypoint-list .error-message").forEach((span) => { span.textContent = ""; });

  const response = await fetch("/api/v1/transport-requests/validate/", {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({waypoints: collectWaypoints()}),
  });
  if (response.status === 400) {
    const body = await response.json();
    (body.waypoints || []).forEach((errors, i) => {
      Object.entries(errors || {}).forEach(([field, messages]) => {
        const input = document.getElementById(`waypoints[${i}].${field}`);
        if (!input) return;
        input.parentElement.querySelector(".error-message").textContent =
          Array.isArray(messages) ? messages[0] : String(messages);
      });
    });
    return false;
  }
  return !missing;
}

async function goTo(step) {
  if (step === current) return;
  if (current === "waypoints" && !(await validateWaypoints())) return;
  activate(step);
}

async function sendRequest() {
  const status = document.getElementById("submit-status");
  const response = await fetch("/api/v1/transport-requests/", {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({
      waypoints: collectWaypoints(),
      cargo: collectCargo(),
      reference: valueOf("reference"),
      costCenter: valueOf("costCenter"),
      carriers: selectedCarriers(),
    }),
  });
  status.textContent = response.ok ? "Request sent" : `Request failed (${response.status})`;
}

document.addEventListener("click", (event) => {
  const target = event.target;

  const option = target.closest("li.multiselect-option");
  if (option) {
    const cargoSelect = option.closest(".cargo-select");
    if (cargoSelect) {
      const label = option.querySelector("span").textContent;
      cargoSelect.dataset.label = label;
      cargoSelect.querySelector(".multiselect-placeholder").textContent = label;
    } else {
      const input = option.closest(".country-select").querySelector(".country-input");
      input.value = option.getAttribute("aria-label");
      input.dataset.code = option.dataset.code;
    }
    closeDropdowns();
    return;
  }

  const countryInput = target.closest(".country-input");
  if (countryInput) {
    closeDropdowns();
    countryInput.parentElement.querySelector(".multiselect-dropdown").classList.add("open");
    return;
  }

  const cargoSelect = target.closest(".cargo-select");
  if (cargoSelect) {
    closeDropdowns();
    cargoSelect.querySelector(".multiselect-dropdown").classList.add("open");
    return;
  }

  if (target.closest(".remove-waypoint")) {
    target.closest(".draggable").remove();
    reindex();
    return;
  }
  if (target.closest("#add-waypoint")) { addContainer(); return; }

  const mode = target.closest(".mode");
  if (mode) {
    document.querySelectorAll(".mode").forEach((m) => m.classList.toggle("active", m === mode));
    return;
  }

  const tab = target.closest(".step-tab");
  if (tab) { goTo(tab.dataset.step); return; }

  const reviewTab = target.closest(".review-tab");
  if (reviewTab) {
    document.querySelectorAll(".review-tab").forEach((t) => t.classList.toggle("active", t === reviewTab));
    return;
  }

  if (target.closest("#continue")) {
    const next = ORDER[ORDER.indexOf(current) + 1];
    if (next) goTo(next);
    return;
  }
  if (target.closest("#send-request")) { sendRequest(); }
});

document.addEventListener("change", (event) => {
  if (event.target.classList.contains("carrier")) updateSendButton();
});

document.addEventListener("keydown", (event) => {
  if (event.key === "Escape") closeDropdowns();
});

renderCargoSelects();
addContainer();
addContainer();
</script>
</body>
</html>
""".replace("__COUNTRIES__", _COUNTRIES_JS).replace(
    "__HIDDEN_CODE__", HIDDEN_COUNTRY[0]
).replace("__HIDDEN_NAME__", HIDDEN_COUNTRY[1]).replace("__CARRIERS__", _CARRIERS_HTML)
