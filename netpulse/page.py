"""Operator console page: static sections around the prediction panel."""

import html
import json
import re
from dataclasses import asdict

from .classifier import classify, health_badge, submit_button
from .form_model import FormModel
from .health_probe import HealthProbe
from .models import DEVICE_TYPE_OPTIONS, PROTOCOL_OPTIONS, Succeeded
from .request_controller import RequestController

POLL_INTERVAL_MS = 1500

FEATURES = [
    ("Machine Learning", "Advanced AI algorithms trained on network traffic patterns to predict failures accurately."),
    ("Real-time Analysis", "Process network data in real-time to provide instant insights and predictions."),
    ("Proactive Monitoring", "Detect potential issues before they cause network downtime or performance degradation."),
    ("Fast Response", "Get predictions in milliseconds with high accuracy and reliability."),
    ("Multi-Protocol Support", "Support for TCP, UDP, ICMP protocols across various network devices."),
    ("Analytics Dashboard", "Comprehensive analytics to understand network health trends and patterns."),
]


def build_state(form: FormModel, probe: HealthProbe, controller: RequestController) -> dict:
    """Snapshot of everything the prediction panel renders."""
    outcome = controller.outcome
    classification = None
    if isinstance(outcome, Succeeded):
        classification = asdict(classify(outcome.issue_type))
    return {
        "health": probe.status.value,
        "health_badge": asdict(health_badge(probe.status)),
        "form": form.sample.model_dump(mode="json"),
        "outcome": outcome.to_dict(),
        "classification": classification,
        "can_submit": controller.can_submit,
        "submit_button": asdict(submit_button(controller.can_submit, controller.pending)),
    }


def _options(values: list[str], selected: str) -> str:
    out = []
    for value in values:
        attr = " selected" if value == selected else ""
        out.append(
            f'<option value="{html.escape(value)}"{attr}>{html.escape(value.capitalize() if value.islower() else value)}</option>'
        )
    return "".join(out)


def _feature_cards() -> str:
    return "\n".join(
        f'<div class="feature"><h3>{html.escape(title)}</h3><p>{html.escape(text)}</p></div>'
        for title, text in FEATURES
    )


_PAGE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>NetPulse - Network Status Prediction</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <style>
        body { background: #0f172a; color: #e2e8f0; font-family: system-ui, sans-serif; }
        nav { position: fixed; inset: 0 0 auto 0; z-index: 50; padding: 1rem 2rem; display: flex;
              justify-content: space-between; align-items: center; transition: background 0.3s; }
        nav.scrolled { background: rgba(15, 23, 42, 0.95); box-shadow: 0 2px 12px rgba(0, 0, 0, 0.4); }
        nav .links { display: flex; gap: 1.5rem; }
        nav .menu-btn { display: none; }
        @media (max-width: 768px) {
            nav .links { display: none; }
            nav .links.open { display: flex; flex-direction: column; position: absolute; top: 100%;
                              left: 0; right: 0; background: #0f172a; padding: 1rem 2rem; }
            nav .menu-btn { display: block; }
        }
        section { padding: 5rem 1.5rem; max-width: 64rem; margin: 0 auto; }
        .hero { min-height: 80vh; display: flex; flex-direction: column; justify-content: center; text-align: center; }
        .panel { background: rgba(255, 255, 255, 0.05); border: 1px solid rgba(255, 255, 255, 0.1);
                 border-radius: 1rem; padding: 2rem; }
        .grid2 { display: grid; grid-template-columns: repeat(auto-fit, minmax(16rem, 1fr)); gap: 1.5rem; }
        label { display: block; font-size: 0.875rem; margin-bottom: 0.5rem; color: #cbd5e1; }
        input, select { width: 100%; padding: 0.75rem 1rem; background: rgba(51, 65, 85, 0.5);
                        border: 1px solid #475569; border-radius: 0.5rem; color: #fff; }
        button.submit { width: 100%; margin-top: 1.5rem; padding: 1rem; border-radius: 0.5rem;
                        background: #2563eb; color: #fff; font-weight: 600; }
        button.submit:disabled { background: #4b5563; cursor: not-allowed; }
        .badge { display: inline-flex; gap: 0.5rem; padding: 0.5rem 1rem; border-radius: 0.5rem; border-width: 1px; }
        .pulse { animation: pulse 2s infinite; }
        @keyframes pulse { 50% { opacity: 0.5; } }
        .result { margin-top: 2rem; padding: 1.5rem; border-radius: 0.75rem; border-width: 1px; }
        .hidden { display: none; }
        .feature { background: rgba(255, 255, 255, 0.05); border-radius: 0.75rem; padding: 1.5rem; }
        footer { text-align: center; padding: 2rem; color: #64748b; border-top: 1px solid #1e293b; }
    </style>
</head>
<body>
    <nav id="nav">
        <strong>NetPulse</strong>
        <button class="menu-btn" id="menu-btn" aria-label="Toggle menu" aria-expanded="false">&#9776;</button>
        <div class="links" id="nav-links">
            <a href="#home">Home</a>
            <a href="#predict">Predict</a>
            <a href="#about">About</a>
        </div>
    </nav>

    <section id="home" class="hero">
        <h1 class="text-5xl font-bold mb-6">Network Status <span class="text-cyan-400">Prediction</span></h1>
        <p class="text-xl text-gray-300 mb-8">Advanced AI-powered network monitoring and failure prediction system.
            Detect issues before they impact your infrastructure.</p>
        <p><a class="text-blue-400" href="#predict">Try Prediction &rarr;</a></p>
    </section>

    <section id="predict">
        <div class="text-center mb-12">
            <h2 class="text-4xl font-bold mb-4">Network Status Prediction</h2>
            <p class="text-xl text-gray-300 mb-6">Enter network parameters to predict potential issues using AI</p>
            <span id="health-badge" class="badge __BADGE_CLASS__">API Status: <span id="health-text">__BADGE_TEXT__</span></span>
        </div>
        <div class="panel">
            <form id="predict-form">
                <div class="grid2">
                    <div><label for="timestamp">Timestamp</label>
                        <input type="text" id="timestamp" name="timestamp" value="__TIMESTAMP__" placeholder="2025-01-01 12:00:00"></div>
                    <div><label for="protocol">Protocol</label>
                        <select id="protocol" name="protocol">__PROTOCOL_OPTIONS__</select></div>
                    <div><label for="source_ip">Source IP Address</label>
                        <input type="text" id="source_ip" name="source_ip" value="__SOURCE_IP__" placeholder="192.168.1.1"></div>
                    <div><label for="dest_ip">Destination IP Address</label>
                        <input type="text" id="dest_ip" name="dest_ip" value="__DEST_IP__" placeholder="8.8.8.8"></div>
                    <div><label for="packet_size">Packet Size (bytes)</label>
                        <input type="number" id="packet_size" name="packet_size" value="__PACKET_SIZE__" min="1" max="65535"></div>
                    <div><label for="latency_ms">Latency (milliseconds)</label>
                        <input type="number" id="latency_ms" name="latency_ms" value="__LATENCY_MS__" min="0" step="0.1"></div>
                    <div><label for="error_rate">Error Rate (0.0 - 1.0)</label>
                        <input type="number" id="error_rate" name="error_rate" value="__ERROR_RATE__" min="0" max="1" step="0.01"></div>
                    <div><label for="device_type">Device Type</label>
                        <select id="device_type" name="device_type">__DEVICE_OPTIONS__</select></div>
                </div>
                <button type="submit" class="submit" id="submit-btn"__SUBMIT_DISABLED__>__SUBMIT_LABEL__</button>
            </form>
            <div id="result" class="result hidden">
                <h3 class="text-lg font-semibold mb-2">Prediction Result</h3>
                <p><span class="font-medium">Issue Type:</span> <span id="result-label" class="font-bold tracking-wide"></span></p>
                <p><span class="font-medium">Description:</span> <span id="result-description"></span></p>
            </div>
            <div id="error" class="result hidden text-red-400 bg-red-500/20 border-red-500/30">
                <h3 class="text-lg font-semibold">Prediction Error</h3>
                <p id="error-message"></p>
            </div>
        </div>
    </section>

    <section id="about">
        <h2 class="text-4xl font-bold mb-4 text-center">About the System</h2>
        <p class="text-gray-300 mb-8 text-center">Our network status prediction system leverages machine learning
            to analyze network patterns and predict potential failures before they occur.</p>
        <div class="grid2">
__FEATURE_CARDS__
        </div>
    </section>

    <footer>NetPulse &middot; Network Status Prediction</footer>

    <script>
        const initialState = __INITIAL_STATE__;
        let menuOpen = false;
        let scrolled = false;

        document.getElementById('menu-btn').addEventListener('click', () => {
            menuOpen = !menuOpen;
            document.getElementById('nav-links').classList.toggle('open', menuOpen);
            document.getElementById('menu-btn').setAttribute('aria-expanded', String(menuOpen));
        });
        window.addEventListener('scroll', () => {
            scrolled = window.scrollY > 20;
            document.getElementById('nav').classList.toggle('scrolled', scrolled);
        });

        function render(state) {
            const badge = document.getElementById('health-badge');
            badge.className = 'badge ' + state.health_badge.color_class + (state.health_badge.pulse ? ' pulse' : '');
            document.getElementById('health-text').textContent = state.health_badge.text;

            const btn = document.getElementById('submit-btn');
            btn.disabled = state.submit_button.disabled;
            btn.textContent = state.submit_button.label;

            const result = document.getElementById('result');
            const error = document.getElementById('error');
            result.classList.add('hidden');
            error.classList.add('hidden');
            if (state.outcome.kind === 'succeeded' && state.classification) {
                result.className = 'result ' + state.classification.color_class;
                document.getElementById('result-label').textContent = state.classification.label;
                document.getElementById('result-description').textContent = state.classification.description;
            } else if (state.outcome.kind === 'failed') {
                error.classList.remove('hidden');
                document.getElementById('error-message').textContent = state.outcome.message;
            }
        }

        async function refreshState() {
            try {
                const resp = await fetch('/api/state', {cache: 'no-store'});
                render(await resp.json());
            } catch (e) {
                /* console server unreachable; keep last rendered state */
            }
        }

        document.querySelectorAll('#predict-form input, #predict-form select').forEach((el) => {
            el.addEventListener('change', async () => {
                const resp = await fetch('/api/form', {
                    method: 'POST',
                    headers: {'Content-Type': 'application/json'},
                    body: JSON.stringify({field: el.name, value: el.value}),
                });
                if (resp.ok) {
                    const sample = await resp.json();
                    el.value = sample[el.name];
                }
            });
        });

        document.getElementById('predict-form').addEventListener('submit', async (event) => {
            event.preventDefault();
            const resp = await fetch('/api/predict', {method: 'POST'});
            render(await resp.json());
        });

        render(initialState);
        setInterval(refreshState, __POLL_INTERVAL_MS__);
    </script>
</body>
</html>"""


_PLACEHOLDER = re.compile(r"__[A-Z_]+__")


def render_page(state: dict) -> str:
    form = state["form"]
    button = state["submit_button"]
    badge = state["health_badge"]
    # keep "</" out of the inline script
    initial_state = json.dumps(state).replace("</", "<\\/")
    values = {
        "__POLL_INTERVAL_MS__": str(POLL_INTERVAL_MS),
        "__FEATURE_CARDS__": _feature_cards(),
        "__BADGE_CLASS__": html.escape(badge["color_class"]),
        "__BADGE_TEXT__": html.escape(badge["text"]),
        "__SUBMIT_DISABLED__": " disabled" if button["disabled"] else "",
        "__SUBMIT_LABEL__": html.escape(button["label"]),
        "__PROTOCOL_OPTIONS__": _options(PROTOCOL_OPTIONS, form["protocol"]),
        "__DEVICE_OPTIONS__": _options(DEVICE_TYPE_OPTIONS, form["device_type"]),
        "__TIMESTAMP__": html.escape(str(form["timestamp"])),
        "__SOURCE_IP__": html.escape(str(form["source_ip"])),
        "__DEST_IP__": html.escape(str(form["dest_ip"])),
        "__PACKET_SIZE__": html.escape(str(form["packet_size"])),
        "__LATENCY_MS__": html.escape(str(form["latency_ms"])),
        "__ERROR_RATE__": html.escape(str(form["error_rate"])),
        "__INITIAL_STATE__": initial_state,
    }
    # one pass over the template, so substituted text is never rescanned
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(0), m.group(0)), _PAGE_HTML)
