from .models import Band

BAND_COLORS = {
    Band.FAVORABLE.value: "#16a34a",
    Band.NEUTRAL.value: "#ca8a04",
    Band.UNFAVORABLE.value: "#dc2626",
    Band.UNCLASSIFIED.value: "inherit",
}

LEADER_COLORS = ["#22c55e", "#3b82f6", "#ef4444", "#a855f7", "#fb923c"]


def band_css(band: str) -> str:
    color = BAND_COLORS.get(band, "inherit")
    if color == "inherit":
        return ""
    return f"color: {color}; font-weight: 700"


def badge_html(text: str, band: Band) -> str:
    if band is Band.UNCLASSIFIED:
        return f'<span class="badge">{text}</span>'
    return f'<span class="badge badge-{band.value}">{text}</span>'


def inject_theme() -> str:
    return """
<style>
:root {
  --bg-a: #eef6f1;
  --bg-b: #e8efff;
  --glass: rgba(255,255,255,0.72);
  --line: rgba(16,42,67,0.12);
  --text: #102a43;
  --accent: #15803d;
}
.stApp {
  background: radial-gradient(circle at 15% 10%, var(--bg-a), #ffffff 48%),
              radial-gradient(circle at 80% 20%, var(--bg-b), transparent 45%);
}
.block-container {
  padding-top: 1.2rem;
  max-width: 1350px;
}
.hero {
  padding: 1rem 1.2rem;
  border: 1px solid var(--line);
  border-radius: 18px;
  background: var(--glass);
  backdrop-filter: blur(8px);
  margin-bottom: 0.8rem;
}
.leader-row {
  display: flex;
  justify-content: space-between;
  border: 1px solid var(--line);
  border-radius: 12px;
  background: #ffffff;
  padding: 0.5rem 0.8rem;
  margin-bottom: 0.4rem;
}
.badge {
  display: inline-block;
  border-radius: 999px;
  padding: 0.1rem 0.55rem;
  font-size: 0.76rem;
  border: 1px solid var(--line);
}
.badge-favorable { background: #e8f7ee; color: #15803d; }
.badge-neutral { background: #fff7e0; color: #a16207; }
.badge-unfavorable { background: #fdecec; color: #b91c1c; }
@media (max-width: 900px) {
  .block-container { padding-top: 0.5rem; }
}
</style>
"""
