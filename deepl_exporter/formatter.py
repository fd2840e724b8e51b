from .models import UsageSnapshot


def format_usage_simple(usage: UsageSnapshot, tier: str) -> str:
    """Format usage in a simple readable format."""
    lines = [f"\n{'='*60}", f"DeepL API ({tier})"]
    if usage.character_limit > 0:
        lines.append(
            f"  Characters: {usage.character_count}/{usage.character_limit}"
            f" ({usage.usage_percent:.2f}%)"
        )
        lines.append(f"  Remaining: {usage.remaining}")
    else:
        lines.append(f"  Characters: {usage.character_count} (unlimited)")
    lines.append(f"{'='*60}")
    return "\n".join(lines)
