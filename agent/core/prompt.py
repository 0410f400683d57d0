"""Fixed texts spoken by JarviSpark.

The agent talks in a warm Hindi-English mix; every canned line lives here so
the server, the fallback path and the client share one voice.
"""

SYSTEM_PROMPT = (
    "Tum JarviSpark ho – ek pyara, friendly Hindi-English bolne wala AI jo user ke tasks "
    "ko plan karke clear guidance deta hai. Tone warm aur upbeat rakho, video call ke "
    "dost jaisa. Agar koi task aata hai, to steps, reminders, aur helpful prompts do. "
    "Zarurat pade to time estimates aur checklist style pointers bhi do. Humesha "
    "positive closure karo."
)

GREETING = (
    "Namaste! Main aapka chhota sa Jarvis hoon. Bataiye, aaj aapke liye kaunsa "
    "mission tayyar karna hai?"
)

# Fallback reply pieces
FALLBACK_NOTICE = (
    "Server-side Gemini abhi available nahi hai, lekin JarviSpark phir bhi aapka saath dega! ✨"
)
FALLBACK_ECHO = "Aapka mission summary mujhe samajh aa gaya: “{content}”"
FALLBACK_NO_DETAILS = (
    "Mission details mujhe clear nahi mile. Jo bhi karwana ho seedha likh bhej dijiye."
)
FALLBACK_CHECKLIST_HEADER = "Chaliye turbo mode mein ek quick checklist banate hain:"
FALLBACK_PLACEHOLDER_TASKS = (
    "1. Apne mission ko detail mein likhiye",
    "2. JarviSpark se timeline ya reminders bhi maang sakte hain",
)
FALLBACK_CLOSING = (
    "Aap chahein to mujhe deadline ya reminders bhi bata sakte hain — main ek friendly "
    "ping bhej dunga!"
)

# Error texts
UPSTREAM_EMPTY_ERROR = "Gemini ne khaali response diya. Thodi der baad try karein."
HANDLER_ERROR = "Agent ko response banane mein dikkat aa rahi hai."
NO_RESPONSE_ERROR = "Agent ko response nahi mila."
EMPTY_REPLY_ERROR = "Agent ne kuchh nahi kaha — phir se koshish karein."
GENERIC_CLIENT_ERROR = "Kuch toh gadbad hai. Thodi der baad fir se try karein."
