# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji section headers (Telegram HTML)."""

from __future__ import annotations

from typing import Any, cast

from token_sniper.notifications.types import NotificationMessage, NotificationStyler

_BUY_EVENT_TYPES = frozenset({"buy_succeeded", "buy_failed"})


class EventNotificationStyler(NotificationStyler):
    """Render notifications by event_type with emojis, separators and formatted sections."""

    def render(self, message: NotificationMessage) -> str:
        if message.event_type in _BUY_EVENT_TYPES:
            return self._render_buy(message)
        if message.event_type in ("system_started", "system_stopped"):
            return self._render_system(message)
        return self._render_generic(message)

    def _render_buy(self, message: NotificationMessage) -> str:
        payload: dict[str, Any] = dict(message.payload or {})
        token_raw = payload.get("token")
        token = cast(dict[str, Any], token_raw) if isinstance(token_raw, dict) else {}
        emoji, title = self._title(message.event_type)

        sections = [
            f"{emoji} <b>{title}</b>\n",
            self._section(
                "🪙 Token",
                [
                    ("🏷️ Name", token.get("name")),
                    ("🔤 Symbol", token.get("symbol")),
                    ("📍 Contract", payload.get("contract_address")),
                ],
            ),
            self._section(
                "🔎 Source",
                [
                    ("📡 Detector", payload.get("source")),
                    ("👤 Origin", payload.get("origin")),
                ],
            ),
            self._section(
                "💰 Purchase",
                [
                    ("🔗 Transaction", payload.get("transaction_hash")),
                    ("📦 Tokens received", payload.get("token_amount_received")),
                    ("💵 Spent (wei)", payload.get("asset_spent_wei")),
                    ("🧾 Tax", self._format_percent(payload.get("tax_percent"))),
                ],
            ),
        ]
        if message.event_type == "buy_failed":
            sections.append(
                self._section(
                    "⚠️ Failure",
                    [
                        ("❌ Reason", payload.get("error_kind")),
                        ("📝 Detail", payload.get("error_message")),
                    ],
                )
            )
        return "\n".join(s for s in sections if s).strip()

    def _render_system(self, message: NotificationMessage) -> str:
        emoji, title = self._title(message.event_type)
        payload = message.payload or {}
        lines = [f"{emoji} <b>{title}</b>\n", self._section("📋 Status", [("", message.message)])]
        identities = payload.get("identities")
        if isinstance(identities, list) and identities:
            lines.append(self._section("👥 Watching", [("", ", ".join(str(i) for i in identities))]))
        wallets = payload.get("wallets")
        if isinstance(wallets, list) and wallets:
            lines.append(self._section("👛 Wallets", [("", ", ".join(str(w) for w in wallets))]))
        return "\n".join(line for line in lines if line).strip()

    def _render_generic(self, message: NotificationMessage) -> str:
        emoji, title = self._title(message.event_type)
        lines = [f"{emoji} <b>{title}</b>", message.message]
        for key in sorted((message.payload or {}).keys()):
            value = (message.payload or {}).get(key)
            if value is not None:
                lines.append(f"<b>{key}:</b> {value}")
        return "\n".join(lines).strip()

    @staticmethod
    def _title(event_type: str) -> tuple[str, str]:
        mapping = {
            "buy_succeeded": ("🟢", "Token Bought"),
            "buy_failed": ("🔴", "Buy Failed"),
            "system_started": ("▶️", "Sniper Started"),
            "system_stopped": ("⏹️", "Sniper Stopped"),
        }
        return mapping.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))

    def _section(self, header: str, rows: list[tuple[str, Any]]) -> str:
        content = [
            f"{self._format_label(label)} {value}" if label else str(value)
            for label, value in rows
            if value not in (None, "")
        ]
        if not content:
            return ""
        return "\n".join([f"{self._format_heading(header)}\n{'─' * 12}", *content]) + "\n"

    @staticmethod
    def _format_percent(value: Any) -> str | None:
        if value is None:
            return None
        try:
            return f"{float(value):.2f}%"
        except (TypeError, ValueError):
            return str(value)

    @staticmethod
    def _format_heading(text: str) -> str:
        emoji, _, remainder = text.partition(" ")
        return f"{emoji} <b>{remainder}</b>" if remainder else f"<b>{text}</b>"

    @staticmethod
    def _format_label(label: str) -> str:
        emoji, _, remainder = label.partition(" ")
        return f"{emoji} <b>{remainder}:</b>" if remainder else f"<b>{label}:</b>"
