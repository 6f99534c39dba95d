# Built-in Kai lexicon: symptom guidance and the phrase variants that map to it.
#
# Entries are listed by descending urgency. Fuzzy matching breaks score ties by
# lexicon order, so a more severe key wins a tie ("high fever" vs "fever").
# A phrase may appear under one key only; load_lexicon() rejects duplicates.

SYMPTOMS = [
    # ---- EMERGENCY: banner + advice only, never home care or questions ----
    {
        "key": "severe_bleeding",
        "urgency": "EMERGENCY",
        "advice": {
            "EN": "🚨 EMERGENCY: Severe bleeding requires immediate medical attention. Apply pressure to the wound and go to the hospital NOW!",
            "KRI": "🚨 EMƐJƐNSI: Blɔd de kɔmɔt bad bad! Pres di wun ɛn go na ɔspitul NAW NAW!",
        },
    },
    {
        "key": "difficulty_breathing",
        "urgency": "EMERGENCY",
        "advice": {
            "EN": "🚨 EMERGENCY: Difficulty breathing is serious. Go to the hospital immediately!",
            "KRI": "🚨 EMƐJƐNSI: If yu nɔ de brid fayn, dis siryɔs! Go na ɔspitul kwik kwik!",
        },
    },
    {
        "key": "chest_pain",
        "urgency": "EMERGENCY",
        "advice": {
            "EN": "🚨 EMERGENCY: Chest pain can be serious. Go to the hospital immediately!",
            "KRI": "🚨 EMƐJƐNSI: Ches de pɛn go bi siryɔs! Go na ɔspitul naw naw!",
        },
    },
    {
        "key": "unconscious",
        "urgency": "EMERGENCY",
        "advice": {
            "EN": "🚨 EMERGENCY: If someone is unconscious, call for help and take them to the hospital immediately!",
            "KRI": "🚨 EMƐJƐNSI: If pɔsin fɔdɔm ɛn nɔ de wek ɔp, kɔl fɔ ɛp ɛn tek am go ɔspitul kwik!",
        },
    },
    {
        "key": "convulsions",
        "urgency": "EMERGENCY",
        "advice": {
            "EN": "🚨 EMERGENCY: Convulsions (fits) require immediate medical care. Keep the person safe and go to hospital!",
            "KRI": "🚨 EMƐJƐNSI: Fit de kech am! Kip am sef ɛn go na ɔspitul naw naw!",
        },
    },

    # ---- URGENT: seek care today, home care in the meantime ----
    {
        "key": "high_fever",
        "urgency": "URGENT",
        "advice": {
            "EN": "High fever (above 39°C/102°F) needs medical attention today, especially if lasting more than 2 days. In the meantime, follow these home care tips.",
            "KRI": "Fiba ɔt ɔt (mɔ pas 39°C) - go si dɔkta tide, ɛspɛshali if i pas 2 die. Fɔ naw, du dis:",
        },
        "home_care": {
            "EN": ["Take paracetamol as directed (every 6-8 hours)", "Drink plenty of fluids - water, ORS, or light soup", "Use a cool cloth on forehead", "Rest well", "Wear light clothing"],
            "KRI": ["Tek paracetamol (ɛvri 6-8 awa)", "Drink plenty wata, ORS, ɔ layt sup", "Yuz kol klɔt na fɔred", "Res gud gud", "Wia layt klos"],
        },
        "questions": {
            "EN": ["How long have you had the fever?", "Is there any neck stiffness?", "Any rash on the body?"],
            "KRI": ["Aw lɔng yu gɛt di fiba?", "Yu nɛk stif?", "Ɛni rash de na bɔdi?"],
        },
    },
    {
        "key": "severe_vomiting",
        "urgency": "URGENT",
        "advice": {
            "EN": "Severe or persistent vomiting (many times, can't keep fluids down) can cause dehydration. Try these tips, and see a health worker today if it continues.",
            "KRI": "If yu de troway plenty ɛn yu nɔ fit hol wata na bɛlɛ, yu go lus wata. Tray dis, ɛn go si ɛlt wɔka if i kɔntinyu.",
        },
        "home_care": {
            "EN": ["Sip small amounts of ORS or water frequently", "Avoid solid food until vomiting stops", "Rest", "Watch for signs of dehydration (dry mouth, dizziness)"],
            "KRI": ["Drink smɔl smɔl ORS ɔ wata", "Nɔ it ɛni tin til yu stɔp troway", "Res", "Wach if yu mɔt dray ɔ yu de dizi"],
        },
    },
    {
        "key": "severe_diarrhea",
        "urgency": "URGENT",
        "advice": {
            "EN": "Severe diarrhea (many watery stools, blood in stool) needs attention. Use ORS and follow these tips. See a health worker if not improving.",
            "KRI": "Rɔnbɛlɛ bad (plenty wata stul, blɔd de) nid atɛnshɔn. Yuz ORS ɛn du dis. Go si ɛlt wɔka if i nɔ bɛta.",
        },
        "home_care": {
            "EN": ["Drink ORS after each loose stool - this is very important!", "Continue breastfeeding if infant", "Eat small light meals", "Watch for dehydration (dry mouth, less urination, dizziness)"],
            "KRI": ["Drink ORS afta ɛvri rɔnbɛlɛ - dis impɔtant!", "Kip giv brɛstmilk if na pikin", "It smɔl smɔl layt it", "Wach if bɔdi de dray (mɔt dray, nɔ de pis, dizi)"],
        },
    },

    # ---- MODERATE: manage at home, monitor closely ----
    {
        "key": "mild_fever",
        "urgency": "MODERATE",
        "advice": {
            "EN": "Mild fever (below 39°C/102°F) can often be managed at home. Here's what to do:",
            "KRI": "Smɔl fiba (ɔnda 39°C) go fit manaj na os. Dis na wetin fɔ du:",
        },
        "home_care": {
            "EN": ["Take paracetamol if uncomfortable", "Drink plenty of fluids", "Rest", "Monitor temperature", "Seek care if fever persists more than 3 days"],
            "KRI": ["Tek paracetamol if yu nɔ fil fayn", "Drink plenty wata", "Res", "Chɛk yu tempricha", "Go klinik if fiba pas 3 die"],
        },
    },
    {
        "key": "mild_vomiting",
        "urgency": "MODERATE",
        "advice": {
            "EN": "Occasional vomiting can often be managed at home. Here's what to do:",
            "KRI": "If yu de troway wan wan tɛm, yu go fit manaj na os. Dis na wetin fɔ du:",
        },
        "home_care": {
            "EN": ["Wait 30 minutes after vomiting before drinking", "Sip small amounts of water or ORS", "Avoid solid food for a few hours", "Rest", "Seek care if vomiting continues for more than 24 hours"],
            "KRI": ["Wet 30 minit afta yu troway bɔfɔ yu drink", "Drink smɔl smɔl wata ɔ ORS", "Nɔ it ɛni tin fɔ smɔl tɛm", "Res", "Go klinik if yu de troway mɔ dan 24 awa"],
        },
    },
    {
        "key": "mild_diarrhea",
        "urgency": "MODERATE",
        "advice": {
            "EN": "Mild diarrhea (a few loose stools) usually gets better in a few days. Here's what to do:",
            "KRI": "Smɔl rɔnbɛlɛ go bɛta afta smɔl die. Dis na wetin fɔ du:",
        },
        "home_care": {
            "EN": ["Drink ORS after each loose stool", "Eat light meals when hungry", "Avoid spicy or fatty foods", "Wash hands frequently", "Seek care if blood in stool or not improving in 3 days"],
            "KRI": ["Drink ORS afta ɛvri rɔnbɛlɛ", "It layt it we yu angri", "Liav pɛpɛ ɛn ɔyli it", "Was yu an dɛm ɔltɛm", "Go klinik if blɔd de ɔ if i nɔ bɛta afta 3 die"],
        },
    },
    {
        "key": "malaria_suspected",
        "urgency": "MODERATE",
        "advice": {
            "EN": "These symptoms could be malaria (fever with chills, body aches, headache). Get tested soon - malaria is treatable!",
            "KRI": "Dis go bi malɛria (fiba wit kol, bɔdi de pɛn, ɛd de wɔri). Go tɛs sun - malɛria gɛt mɛdisin!",
        },
        "home_care": {
            "EN": ["Take paracetamol for fever and pain", "Drink plenty of fluids", "Sleep under a mosquito net", "Get tested at a health facility or with a rapid test", "If positive, complete all prescribed medication"],
            "KRI": ["Tek paracetamol fɔ fiba ɛn pɛn", "Drink plenty wata", "Slip insay mɔskito nɛt", "Go tɛs na klinik ɔ yuz rapid tɛs", "If i pɔzitiv, tek ɔl di mɛdisin dɛn giv yu"],
        },
        "questions": {
            "EN": ["Have you been tested for malaria?", "How long have you had fever?", "Did you sleep under a mosquito net?"],
            "KRI": ["Yu dɔn tɛs fɔ malɛria?", "Aw lɔng yu gɛt fiba?", "Yu de slip insay mɔskito nɛt?"],
        },
    },
    {
        "key": "cough",
        "urgency": "MODERATE",
        "advice": {
            "EN": "A cough that lasts more than 2 weeks, or with blood, needs to be checked. Otherwise, rest and drink fluids.",
            "KRI": "Kɔf we pas 2 wik, ɔ kɔf wit blɔd, fɔ go chɛk. If nɔ, res ɛn drink wata.",
        },
        "home_care": {
            "EN": ["Drink warm fluids", "Get plenty of rest", "Avoid dusty areas", "Cover mouth when coughing"],
            "KRI": ["Drink wɔm wata ɔ ti", "Res gud gud", "Nɔ go we dɔs de", "Kɔva yu mɔt we yu de kɔf"],
        },
        "questions": {
            "EN": ["How long have you been coughing?", "Is there any blood in the cough?", "Do you have fever too?"],
            "KRI": ["Aw lɔng yu de kɔf?", "Ɛni blɔd de insay di kɔf?", "Fiba de tu?"],
        },
    },
    {
        "key": "headache",
        "urgency": "MODERATE",
        "advice": {
            "EN": "For mild headache, rest and take paracetamol. Seek care if severe, sudden, or with fever/stiff neck.",
            "KRI": "Fɔ smɔl ɛdɛk, res ɛn tek paracetamol. Go si dɔkta if i bad bad, ɔ kɔm wantem, ɔ wit fiba/stif nɛk.",
        },
        "home_care": {
            "EN": ["Take paracetamol as directed", "Rest in a quiet dark room", "Drink water", "Avoid stress"],
            "KRI": ["Tek paracetamol", "Res na dak rum", "Drink wata", "Nɔ wɔri tumos"],
        },
    },
    {
        "key": "body_pain",
        "urgency": "MODERATE",
        "advice": {
            "EN": "General body pain can have many causes. Rest and take paracetamol. See a health worker if it continues more than 3 days or gets worse.",
            "KRI": "Bɔdi de pɛn gɛt plenty rizin. Res ɛn tek paracetamol. Go si ɛlt wɔka if i pas 3 die ɔ de wɔs.",
        },
        "home_care": {
            "EN": ["Rest well", "Take paracetamol for pain", "Drink plenty of fluids", "Light stretching may help"],
            "KRI": ["Res gud gud", "Tek paracetamol fɔ pɛn", "Drink plenty wata", "Strɛch smɔl go ɛp"],
        },
    },
    {
        "key": "weakness",
        "urgency": "MODERATE",
        "advice": {
            "EN": "Feeling weak or very tired often improves with rest, food and fluids. See a health worker if it lasts more than a few days or you also have fever.",
            "KRI": "If yu fil wik ɔ yu tayad bad, res, it gud gud ɛn drink wata. Go si ɛlt wɔka if i pas smɔl die ɔ fiba de tu.",
        },
        "home_care": {
            "EN": ["Rest well", "Eat regular meals", "Drink plenty of fluids", "Seek care if it gets worse"],
            "KRI": ["Res gud gud", "It gud gud", "Drink plenty wata", "Go klinik if i de wɔs"],
        },
        "questions": {
            "EN": ["How long have you felt weak?", "Do you have fever too?"],
            "KRI": ["Aw lɔng yu de fil wik?", "Fiba de tu?"],
        },
    },
    {
        "key": "dizziness",
        "urgency": "MODERATE",
        "advice": {
            "EN": "Dizziness often passes with rest and fluids. Sit or lie down until it stops. Seek care if you faint or it keeps coming back.",
            "KRI": "If yu ɛd de tɔn, siddɔm ɔ ledɔm te i stɔp, ɛn drink wata. Go si dɔkta if yu fɛnt ɔ i de kam bak bak.",
        },
        "home_care": {
            "EN": ["Sit or lie down until it passes", "Drink water", "Stand up slowly", "Avoid driving while dizzy"],
            "KRI": ["Siddɔm ɔ ledɔm te i pas", "Drink wata", "Grap saful saful", "Nɔ drayv we yu ɛd de tɔn"],
        },
    },

    # ---- ROUTINE: home care appropriate ----
    {
        "key": "mild_cold",
        "urgency": "ROUTINE",
        "advice": {
            "EN": "A common cold usually gets better on its own in 7-10 days. Rest and drink fluids.",
            "KRI": "Kɔmɔn kol go bɛta na im yon afta 7-10 die. Res ɛn drink wata.",
        },
        "home_care": {
            "EN": ["Rest as much as possible", "Drink warm fluids", "Wash hands frequently", "Avoid spreading to others"],
            "KRI": ["Res gud gud", "Drink wɔm wata ɔ ti", "Was yu an dɛm ɔltɛm", "Nɔ spred am go na ɔda pipul"],
        },
    },
    {
        "key": "mild_stomach",
        "urgency": "ROUTINE",
        "advice": {
            "EN": "Mild stomach discomfort often passes. Eat light meals, drink water, and rest.",
            "KRI": "Smɔl bɛlɛwɔri go pas. It layt it, drink wata, ɛn res.",
        },
        "home_care": {
            "EN": ["Eat small, light meals", "Drink plenty of water", "Avoid spicy or fatty foods", "Rest"],
            "KRI": ["It smɔl smɔl layt it", "Drink plenty wata", "Liav pɛpɛ ɛn ɔyli it", "Res"],
        },
    },
    {
        "key": "skin_rash",
        "urgency": "ROUTINE",
        "advice": {
            "EN": "Most itchy rashes settle with gentle care. Keep the skin clean and dry. See a health worker if it spreads fast, blisters, or comes with fever.",
            "KRI": "Bɔku rash go bɛta if yu kia fɔ am. Kip di skin klin ɛn dray. Go si ɛlt wɔka if i de spred kwik ɔ fiba de tu.",
        },
        "home_care": {
            "EN": ["Wash with clean water and mild soap", "Do not scratch", "Wear loose cotton clothing"],
            "KRI": ["Was wit klin wata ɛn sop", "Nɔ skratch am", "Wia layt kɔtin klos"],
        },
    },
]


VARIANTS = {
    "severe_bleeding": [
        "bleeding heavily", "bleeding bad", "heavy bleeding", "severe bleeding",
        "blood wont stop", "blood won't stop", "blɔd nɔ de stɔp", "blod no de stop",
    ],
    "difficulty_breathing": [
        "can't breathe", "cant breathe", "cannot breathe", "hard to breathe",
        "struggling to breathe", "breathing hard", "short of breath", "short breath",
        "short bret", "struggle for breath", "a no de brid fayn", "no de brid fine",
        "no de brid", "nɔ de brid", "a de gasp",
    ],
    "chest_pain": [
        "severe chest pain", "chest pain", "ches de pen bad", "ches de pen",
        "ches de pɛn", "chest de pen", "mi ches de pen", "chest tight", "heavy chest",
    ],
    "unconscious": [
        "unconscious", "passed out", "fainted", "not waking up",
        "nɔ de wek ɔp", "no de wek op",
    ],
    "convulsions": [
        "convulsion", "seizure", "fit de kech am", "fit kech am", "fit catch am",
        "having fits", "shaking bad",
    ],
    "high_fever": [
        "very high fever", "high fever", "fiba bad", "bɔdi de bɔn bad",
    ],
    "severe_vomiting": [
        "cant keep food down", "can't keep food down", "vomiting all day",
        "vomiting blood", "troway bad bad",
    ],
    "severe_diarrhea": [
        "blood in stool", "diarrhea with blood", "severe diarrhea", "bloody diarrhea",
    ],
    "mild_fever": [
        "fever", "fiba", "bodi ot", "bɔdi ɔt", "body hot", "a get fiba", "a gat fiba",
        "mi bodi ot", "temperature", "body de bon", "hot body",
    ],
    "mild_vomiting": [
        "vomiting", "vomit", "throwing up", "troway", "trowe", "a de troway",
        "a de trowe", "a de vomit", "nɔ fit hol it",
    ],
    "mild_diarrhea": [
        "diarrhea", "diarrhoea", "runbele", "ronbele", "rɔnbɛlɛ", "run belly",
        "loose stool", "watery stool", "wata de komot", "plenty stool",
        "toilet plenty", "watery toilet",
    ],
    "malaria_suspected": [
        "malaria", "maleria", "malɛria", "palidis", "i think malaria",
    ],
    "cough": [
        "cough", "coughing", "kof", "kɔf", "a de kof", "dry kof", "dry kɔf",
        "phlegm kof", "chest kof",
    ],
    "headache": [
        "headache", "head ache", "head pain", "my head hurt", "my head",
        "edek", "edik", "ɛdɛk", "a get edek", "agat edik", "a gat edek",
        "ed de wori", "ed de pen", "ɛd de wɔri", "ɛd de pɛn",
        "mi ed de wori", "mi ed de pen", "ed split", "ed de spit",
        "heavy head", "head heavy",
    ],
    "body_pain": [
        "body pain", "body ache", "bodi de pen", "bɔdi de pɛn", "a get bodi pen",
        "mi bodi de pen", "aching", "all over pain", "joint de pen", "lul deni de pen",
    ],
    "weakness": [
        "a fil wik", "a weak", "feeling weak", "no get pawa", "nɔ gɛt pawa",
        "weak weak", "no strength", "tired", "tayad", "tiyad", "body pas mi",
        "lose strength",
    ],
    "dizziness": [
        "ed de ton", "ɛd de tɔn", "mi ed de ton", "a de dizi", "dizzy",
        "head spinning", "spinning head", "head turning",
    ],
    "mild_cold": [
        "cold", "runny nose", "stuffy nose", "sneezing", "snizin", "catarrh",
        "kol kech mi", "kold kech mi", "cold catch me", "a get kol",
        "nose de run", "nose de ron",
    ],
    "mild_stomach": [
        "stomach ache", "stomach pain", "tummy ache", "belly pain", "belly ache",
        "bele de wori", "bɛlɛ de wɔri", "bele de pen", "bɛlɛ de pɛn",
        "mi bele de wori", "a get bele pen", "bele de pik mi", "stomach cramp",
        "bele cramp", "pain na belly",
    ],
    "skin_rash": [
        "rash", "itchy skin", "skin de itch", "skin de bon", "skin de scratch",
        "skin issue", "sore na skin",
    ],
}
