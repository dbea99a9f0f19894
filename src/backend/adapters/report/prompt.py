from __future__ import annotations

import json

from common.licensing_engine.models import BusinessProfile, MatchResult

SYSTEM_PROMPT = (
    "אתה מומחה ברישוי עסקים בישראל. תפקידך להפוך מידע טכני מורכב על דרישות רישוי לדוח ברור ומובן "
    "עבור בעלי עסקים. הדוח צריך להיות בעברית, מקצועי אך נגיש."
)

REPORT_SHAPE = """{
  "title": "כותרת הדוח",
  "summary": "סיכום קצר",
  "sections": [
    {
      "title": "כותרת הסעיף",
      "content": "תוכן הסעיף בmarkdown",
      "priority": "high|medium|low"
    }
  ],
  "recommendations": ["המלצה 1", "המלצה 2"],
  "totalEstimatedCost": "הערכת עלות כוללת",
  "estimatedTimeframe": "זמן הערכה כולל"
}"""


def _yes_no(flag: bool) -> str:
    return "כן" if flag else "לא"


def build_report_prompt(match_result: MatchResult, profile: BusinessProfile) -> str:
    requirements_json = json.dumps(
        match_result.model_dump(mode="json", by_alias=True, exclude={"business_profile"}),
        ensure_ascii=False,
        indent=2,
    )
    return f"""
צור דוח מקיף ונגיש על דרישות הרישוי עבור העסק הבא:

**פרטי העסק:**
- סוג העסק: {profile.business_type.value}
- קיבולת ישיבה: {profile.seating_capacity} מקומות
- שטח העסק: {profile.floor_area} מ"ר
- מוכר אלכוהול: {_yes_no(profile.has_capability("alcoholService"))}
- מוכר בשר: {_yes_no(profile.has_capability("meatHandling"))}
- שימוש בגז: {_yes_no(profile.has_capability("gasUsage"))}
- פתוח עד מאוחר: {_yes_no(profile.has_capability("lateNightOperation"))}

**דרישות הרישוי שנמצאו:**
{requirements_json}

אנא צור דוח מובנה הכולל:

1. **סיכום ביצוע** - הסבר קצר על המשמעות של הדרישות עבור העסק הזה
2. **דרישות חובה** - רשימה מסודרת של כל הדרישות החובה, מחולקת לפי רשות
3. **עלויות צפויות** - הערכת עלויות לכל דרישה (אם ידוע)
4. **לוחות זמנים** - כמה זמן לוקח כל תהליך
5. **שלבים מומלצים** - סדר מומלץ לביצוע הדרישות
6. **טיפים והערות** - מידע חשוב נוסף והמלצות

תשובה צריכה להיות בפורמט JSON עם המבנה הבא:
{REPORT_SHAPE}
""".strip()


def build_report_messages(match_result: MatchResult, profile: BusinessProfile) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_report_prompt(match_result, profile)},
    ]
