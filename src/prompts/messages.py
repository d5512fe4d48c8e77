"""Reply catalog for every fixed message the assistant sends, per locale.

English is the fallback for any key a locale does not translate.
"""

from typing import Any, Optional

from src.schemas.session_schema import Locale

MESSAGES: dict[Locale, dict[str, str]] = {
    Locale.EN: {
        "reset": "🔄 Session reset. Type 'start onboarding' to begin again.",
        "onboarding_welcome": (
            "👋 Welcome to {business}! Let's get started. What's your full name?"
        ),
        "onboarding_docs": (
            "Nice to meet you, {name}! Your starting rate is {currency}{wage} per hour.\n"
            "📎 Please upload your right to work documents, then send any message to continue."
        ),
        "onboarding_handbook": (
            "📘 Here's your employee handbook: {handbook_url}\n"
            "Reply 'done' once you've reviewed it."
        ),
        "onboarding_final": (
            "📝 Your contract is being prepared. Reply 'done' to confirm you've received "
            "your handover notes."
        ),
        "onboarding_complete": (
            "✅ All set, {name}! Your contract is on its way. "
            "Let me know if you need anything else."
        ),
        "clock_in": "✅ Clock-in recorded at {time}, {name}.",
        "clock_in_kept": "ℹ️ You're already clocked in since {time}, {name}.",
        "clock_out": (
            "🕓 Great work today, {name}! You worked {hours} hours.\n"
            "💷 Estimated pay: {currency}{pay}"
        ),
        "not_clocked_in": "⚠️ You haven't clocked in yet.",
        "checklist_start": "✅ Starting {checklist}...\nTask 1: {task}",
        "checklist_next": "Next task ({number}/{total}): {task}",
        "checklist_complete": "✅ Checklist complete. Well done!",
        "forecast_start": (
            "📊 Let's begin your {days}-day forecast. Please give me data for Day 1 "
            "(customers, avg spend, sales)"
        ),
        "forecast_next": "✅ Got it! Now give me Day {day}'s data.",
        "forecast_retry": (
            "⚠️ Couldn't understand. Please try again with customers, avg spend, "
            "and sales for Day {day}."
        ),
        "forecast_summary": "📈 Forecast Summary:\n{summary}",
        "forecast_line": "Day {day}: Projected {currency}{projected}, Reported: {currency}{sales}",
        "maintenance_prefix": "🛠️ Maintenance logged:",
        "apology": "⚠️ Sorry, I couldn't process that right now. Please try again in a moment.",
        "team_member": "team member",
    },
    Locale.RO: {
        "reset": "🔄 Sesiune resetată. Scrie 'start onboarding' pentru a începe din nou.",
        "onboarding_welcome": (
            "👋 Bine ai venit la {business}! Să începem. Care este numele tău complet?"
        ),
        "onboarding_docs": (
            "Încântat de cunoștință, {name}! Tariful tău de început este {currency}{wage} pe oră.\n"
            "📎 Te rog încarcă documentele de drept de muncă, apoi trimite orice mesaj."
        ),
        "onboarding_handbook": (
            "📘 Iată manualul angajatului: {handbook_url}\n"
            "Răspunde 'done' după ce l-ai citit."
        ),
        "onboarding_final": (
            "📝 Contractul tău este în pregătire. Răspunde 'done' pentru a confirma "
            "că ai primit notele de predare."
        ),
        "onboarding_complete": (
            "✅ Totul e gata, {name}! Contractul este pe drum. "
            "Spune-mi dacă mai ai nevoie de ceva."
        ),
        "clock_in": "✅ Pontaj de intrare înregistrat la {time}, {name}.",
        "clock_in_kept": "ℹ️ Ești deja pontat de la {time}, {name}.",
        "clock_out": (
            "🕓 Bună treabă azi, {name}! Ai lucrat {hours} ore.\n"
            "💷 Plată estimată: {currency}{pay}"
        ),
        "not_clocked_in": "⚠️ Nu te-ai pontat încă.",
        "checklist_start": "✅ Începem {checklist}...\nSarcina 1: {task}",
        "checklist_next": "Următoarea sarcină ({number}/{total}): {task}",
        "checklist_complete": "✅ Lista de verificare este completă. Bravo!",
        "forecast_start": (
            "📊 Să începem prognoza pe {days} zile. Trimite datele pentru Ziua 1 "
            "(clienți, cheltuială medie, vânzări)"
        ),
        "forecast_next": "✅ Am notat! Acum trimite datele pentru Ziua {day}.",
        "forecast_retry": (
            "⚠️ Nu am înțeles. Încearcă din nou cu clienți, cheltuială medie "
            "și vânzări pentru Ziua {day}."
        ),
        "forecast_summary": "📈 Rezumatul prognozei:\n{summary}",
        "forecast_line": "Ziua {day}: Estimat {currency}{projected}, Raportat: {currency}{sales}",
        "maintenance_prefix": "🛠️ Problemă înregistrată:",
        "apology": "⚠️ Ne pare rău, nu am putut procesa mesajul acum. Încearcă din nou.",
        "team_member": "coleg",
    },
}


def get_message(key: str, locale: Optional[Locale] = None, **params: Any) -> str:
    """Look up a reply template and fill in its parameters.

    Raises:
        KeyError: If the key is not defined for English.
    """
    catalog = MESSAGES.get(locale or Locale.EN, MESSAGES[Locale.EN])
    template = catalog.get(key) or MESSAGES[Locale.EN][key]
    return template.format(**params) if params else template
