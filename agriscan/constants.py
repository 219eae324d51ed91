"""All magic values live here — no inline literals anywhere else."""

# Telegram chat action re-send interval (seconds).
# A chat action expires after ~5 s, so we refresh every 4 s.
TELEGRAM_ACTION_INTERVAL: float = 4.0

# Vision providers
PROVIDER_CLAUDE = "claude"
PROVIDER_GEMINI = "gemini"
PROVIDER_OPENAI = "openai"
DEFAULT_PROVIDER = PROVIDER_CLAUDE

# Anthropic
CLAUDE_VISION_MODEL = "claude-sonnet-4-5-20250929"
CLAUDE_MAX_TOKENS = 1000

# OpenAI
OPENAI_VISION_MODEL = "gpt-4o"

# Gemini — ordered, most current first
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_GEMINI_MODELS = "gemini-2.5-flash,gemini-2.5-flash-latest,gemini-1.5-pro-latest"
GEMINI_RESPONSE_MIME_TYPE = "application/json"
GEMINI_UNAVAILABLE_MARKERS = ("not found", "not supported")

# Request deadline per call / per fallback candidate (seconds)
VISION_TIMEOUT_SECONDS: float = 60.0

# Image intake
IMAGE_MIME_PREFIX = "image/"
PHOTO_MIME_TYPE = "image/jpeg"

# Diagnosis prompt
PROMPT_VERSION = "2"
DIAGNOSIS_PROMPT = (
    "You are an expert agricultural pest and plant disease specialist AI. "
    "Carefully examine the attached image and return ONLY a single JSON object "
    "(no extra text, no markdown, nothing else) matching this schema:\n"
    "\n"
    "{\n"
    '  "pest_name": "name or null",\n'
    '  "disease_name": "name or null",\n'
    '  "severity": "Low/Medium/High",\n'
    '  "symptoms": ["symptom1", "symptom2"],\n'
    '  "cause": "brief cause description or null",\n'
    '  "organic_solution": {\n'
    '    "pesticide": "common/trade name or null",\n'
    '    "dosage": "metric amount per liter (and optional US gal) or null",\n'
    '    "application": "short treatment steps"\n'
    "  },\n"
    '  "chemical_solution": {\n'
    '    "pesticide": "common/trade name or null",\n'
    '    "dosage": "metric amount per liter (and optional US gal) or null",\n'
    '    "application": "short treatment steps"\n'
    "  },\n"
    '  "prevention": ["concise tip1", "concise tip2", "concise tip3"],\n'
    '  "image_quality": "clear/unclear"\n'
    "}\n"
    "\n"
    "Detailed Rules:\n"
    "1. Image quality: If the image is blurry, too dark, only shows distant plants, "
    "or doesn't clearly show affected parts, set \"image_quality\": \"unclear\". "
    "In that case set other diagnostic fields to null or empty arrays as appropriate.\n"
    "2. Only visual diagnosis: Provide a diagnosis only when clear visual signs are present. "
    "Do not guess from context.\n"
    "3. Severity scale: Use Low / Medium / High.\n"
    "4. Pesticide guidance: Give real pesticide names; dosage in metric per liter "
    "(optionally per US gallon); short safe application steps.\n"
    "5. Organic vs chemical: Populate organic_solution when suitable; else null.\n"
    "6. Conciseness: Keep each field short (≤15 words).\n"
    "7. Units: Prefer metric; ppm or g/L if reasonable.\n"
    "8. If uncertain: Prefer null rather than guessing. Do not invent names.\n"
    "9. Formatting: Return valid JSON only."
)
IMAGE_QUALITY_UNCLEAR = "unclear"

# Log messages
MSG_BOT_STARTING = "Starting AgriScan bot…"
MSG_SCAN_START = "Scan #%d for chat %s (%s)"
MSG_SCAN_DONE = "Scan #%d finished: %s (%.1fs)"
MSG_SCAN_STALE = "Dropping stale scan #%d for chat %s"
MSG_SEND_FAIL = "✗ Send failed (%.1fs)"
MSG_GEMINI_FALLBACK = "Gemini model %s unavailable: %s"
MSG_PROVIDER_SELECTED = "Vision provider: %s"

# User-facing replies
MSG_ERR_NO_IMAGE = "Please send a photo of the affected plant first."
MSG_ERR_MISSING_KEY = "Missing API key. Set %s in .env"
MSG_ERR_UNSUPPORTED_MEDIA = "Only image files can be analyzed — send a photo of the plant."
MSG_ERR_INTAKE = "The image could not be prepared for analysis: %s"
MSG_ERR_TRANSPORT = "Failed to analyze image. Check network and API key."
MSG_ERR_VENDOR = "Vision service error: %s"
MSG_ERR_NO_TEXT = "Unable to analyze the image. Check key, billing, or image size."
MSG_ERR_MALFORMED = "The diagnosis could not be read. Please try again."
MSG_ERR_DOWNLOAD = "Could not download the image — please try again."
MSG_UNCLEAR_IMAGE = "Image quality is unclear. Upload a clear, well-lit photo."
MSG_SEND_PHOTO_HINT = "Send a photo of the affected plant and I will diagnose it."

# Report
REPORT_NO_ISSUE = "No significant issue detected"
REPORT_UNKNOWN = "—"
REPORT_TITLE = "🌿 Diagnosis: %s"
REPORT_SEVERITY = "Severity: %s"
REPORT_SYMPTOMS = "Symptoms:"
REPORT_CAUSE = "Cause: %s"
REPORT_ORGANIC = "Organic solution:"
REPORT_CHEMICAL = "Chemical solution:"
REPORT_PESTICIDE = "  Pesticide: %s"
REPORT_DOSAGE = "  Dosage: %s"
REPORT_APPLICATION = "  Application: %s"
REPORT_PREVENTION = "Prevention tips:"
REPORT_BULLET = "  • %s"

# Commands
CMD_START = "start"
CMD_HELP = "help"
CMD_STATUS = "status"
MSG_STATUS = (
    "Status\n"
    "  Provider : %s\n"
    "  Model    : %s\n"
    "  API key  : %s\n"
    "  Timeout  : %ss\n"
)

MSG_HELP = (
    "AgriScan — plant pest & disease detection\n"
    "\n"
    "Commands:\n"
    "  /help     — show this message\n"
    "  /status   — current vision provider at a glance\n"
    "\n"
    "Scanning:\n"
    "  Photo              — diagnosed and answered with a report\n"
    "  Image as file      — same, keeps full resolution\n"
    "\n"
    "Tips:\n"
    "  Use a clear, well-lit close-up of the affected leaves or stem.\n"
    "  Only the latest photo you send is answered.\n"
)
