"""Reply texts spoken back to the driver, and builders for the dynamic ones."""

from saathi.conversation.slot_manager import get_confirmation_summary, get_slot_definition
from saathi.schemas.dialog_schema import Card
from saathi.schemas.earnings_schema import EarningsBreakdown
from saathi.schemas.session_schema import FormStage
from saathi.utils import format_rupees

FALLBACK_REPLY = (
    "Main demo mode mein hoon. Aap bol sakte hain: "
    "'Aaj ka net kamai kitni hai', 'Start form', ya 'Help'."
)

EARNINGS_NOT_FOUND_REPLY = "Koi earnings record nahi mila. Aapka driver ID dena padega."

SAHAYATA_REPLY = (
    "Sahayata activated. Kya aapko ambulance chahiye, police chahiye, ya roadside help? "
    "Boliye 'ambulance', 'police', ya 'roadside'."
)

COMPARE_REPLY = (
    "Pichle hafte ke mukable aapka business lagbhag same raha, "
    "thoda sa increase mila. (Demo data)"
)

FORM_STARTED_REPLY = (
    "Chaliye onboarding form shuru karte hain. Pehla sawaal: aapka poora naam bataiye."
)

FORM_START_PROMPT = "Pehela field: aapka poora naam bataiye."

NO_ACTIVE_FORM_REPLY = (
    "Koi form chal nahi raha. Agar aap form bharna chahte hain to boliye 'Start form'."
)

FORM_ALREADY_COMPLETED_REPLY = (
    "Aapka form pehle hi pura ho chuka hai. Naya form bharna ho to boliye 'Start form'."
)

FIELD_NOT_UNDERSTOOD_REPLY = "Field samajh nahi aayi."


def build_earnings_reply(breakdown: EarningsBreakdown) -> str:
    """Narrate the breakdown in one sentence plus a follow-up question."""
    return (
        f"Aaj aapne ₹{format_rupees(breakdown.net)} kamaye, "
        f"ismein gross ₹{format_rupees(breakdown.gross)}, "
        f"kharche ₹{format_rupees(breakdown.expenses)}, "
        f"penalty ₹{format_rupees(breakdown.penalty)}, "
        f"rewards ₹{format_rupees(breakdown.rewards)}. "
        "Kya aap break-up sunna chahenge?"
    )


def build_earnings_card(breakdown: EarningsBreakdown) -> Card:
    return Card(
        title=f"Net earnings: ₹{format_rupees(breakdown.net)}",
        bullets=[
            f"Gross: ₹{format_rupees(breakdown.gross)}",
            f"Expenses: ₹{format_rupees(breakdown.expenses)}",
            f"Penalties: ₹{format_rupees(breakdown.penalty)}",
            f"Rewards: ₹{format_rupees(breakdown.rewards)}",
        ],
    )


def build_field_recorded_reply(field: FormStage, value: str, next_stage: FormStage) -> str:
    """Acknowledge the answer and ask for the next field."""
    if field == FormStage.NAME:
        ack = f"Naam set hua: {value}."
    elif field == FormStage.VEHICLE_REGISTRATION:
        ack = f"Vehicle number liya: {value}."
    else:
        ack = f"{field.value} liya: {value}."

    next_defn = get_slot_definition(next_stage)
    if next_defn is None:
        return ack
    return f"{ack} {next_defn.prompt}"


def build_form_completed_reply(values: dict[str, str]) -> str:
    return (
        "Shukriya. Aapka form pura ho gaya. "
        f"{get_confirmation_summary(values)}. Kya main submit kar doon?"
    )
