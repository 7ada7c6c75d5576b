"""
Localized user-facing strings.

Supported languages: English (en), Hindi (hi), Telugu (te), Tamil (ta), Odia (or).
Keys missing in a language fall back to English.
"""
from healthbot.utils.settings import settings

SUPPORTED_LANGUAGES = {
    "en": "English",
    "hi": "हिंदी",
    "te": "తెలుగు",
    "ta": "தமிழ்",
    "or": "ଓଡ଼ିଆ",
}

TEXTS = {
    "welcome": {
        "en": "👋 Hello! I'm your health assistant. I can answer health questions, check symptoms, share prevention tips and send disease outbreak alerts for your state.",
        "hi": "👋 नमस्ते! मैं आपका स्वास्थ्य सहायक हूँ। मैं स्वास्थ्य प्रश्नों के उत्तर, लक्षण जाँच, बचाव के सुझाव और आपके राज्य के रोग प्रकोप अलर्ट दे सकता हूँ।",
        "te": "👋 నమస్కారం! నేను మీ ఆరోగ్య సహాయకుడిని. ఆరోగ్య ప్రశ్నలకు సమాధానాలు, లక్షణాల పరిశీలన, నివారణ సూచనలు మరియు మీ రాష్ట్రానికి వ్యాధి వ్యాప్తి హెచ్చరికలు ఇస్తాను.",
        "ta": "👋 வணக்கம்! நான் உங்கள் சுகாதார உதவியாளர். சுகாதார கேள்விகள், அறிகுறி சோதனை, தடுப்பு குறிப்புகள் மற்றும் உங்கள் மாநிலத்திற்கான நோய் பரவல் எச்சரிக்கைகளை வழங்குவேன்.",
        "or": "👋 ନମସ୍କାର! ମୁଁ ଆପଣଙ୍କ ସ୍ୱାସ୍ଥ୍ୟ ସହାୟକ। ସ୍ୱାସ୍ଥ୍ୟ ପ୍ରଶ୍ନର ଉତ୍ତର, ଲକ୍ଷଣ ଯାଞ୍ଚ, ପ୍ରତିଷେଧ ପରାମର୍ଶ ଏବଂ ଆପଣଙ୍କ ରାଜ୍ୟର ରୋଗ ପ୍ରକୋପ ସତର୍କତା ଦେଇପାରିବି।",
    },
    "language_prompt": {
        "en": "🌐 Please choose your language.",
        "hi": "🌐 कृपया अपनी भाषा चुनें।",
        "te": "🌐 దయచేసి మీ భాషను ఎంచుకోండి.",
        "ta": "🌐 உங்கள் மொழியைத் தேர்ந்தெடுக்கவும்.",
        "or": "🌐 ଦୟାକରି ଆପଣଙ୍କ ଭାଷା ବାଛନ୍ତୁ।",
    },
    "language_changed": {
        "en": "✅ Language set to English.",
        "hi": "✅ भाषा हिंदी में बदल दी गई है।",
        "te": "✅ భాష తెలుగుకు మార్చబడింది.",
        "ta": "✅ மொழி தமிழாக மாற்றப்பட்டது.",
        "or": "✅ ଭାଷା ଓଡ଼ିଆକୁ ବଦଳାଗଲା।",
    },
    "main_menu": {
        "en": "📋 *Main Menu*\nWhat would you like to do?",
        "hi": "📋 *मुख्य मेनू*\nआप क्या करना चाहेंगे?",
        "te": "📋 *ప్రధాన మెను*\nమీరు ఏమి చేయాలనుకుంటున్నారు?",
        "ta": "📋 *முதன்மை பட்டியல்*\nநீங்கள் என்ன செய்ய விரும்புகிறீர்கள்?",
        "or": "📋 *ମୁଖ୍ୟ ମେନୁ*\nଆପଣ କଣ କରିବାକୁ ଚାହାଁନ୍ତି?",
    },
    "more_options": {
        "en": "➕ More options",
        "hi": "➕ और विकल्प",
        "te": "➕ మరిన్ని ఎంపికలు",
        "ta": "➕ மேலும் விருப்பங்கள்",
        "or": "➕ ଅଧିକ ବିକଳ୍ପ",
    },
    "btn_chat_ai": {"en": "🤖 Ask AI", "hi": "🤖 AI से पूछें", "te": "🤖 AI ని అడగండి", "ta": "🤖 AI-யிடம் கேள்", "or": "🤖 AI କୁ ପଚାରନ୍ତୁ"},
    "btn_symptom_check": {"en": "🩺 Check symptoms", "hi": "🩺 लक्षण जाँच", "te": "🩺 లక్షణాల పరిశీలన", "ta": "🩺 அறிகுறி சோதனை", "or": "🩺 ଲକ୍ଷଣ ଯାଞ୍ଚ"},
    "btn_preventive_tips": {"en": "🛡️ Prevention tips", "hi": "🛡️ बचाव के सुझाव", "te": "🛡️ నివారణ చిట్కాలు", "ta": "🛡️ தடுப்பு குறிப்புகள்", "or": "🛡️ ପ୍ରତିଷେଧ ଟିପ୍ସ"},
    "btn_disease_alerts": {"en": "🦠 Disease alerts", "hi": "🦠 रोग अलर्ट", "te": "🦠 వ్యాధి హెచ్చరికలు", "ta": "🦠 நோய் எச்சரிக்கை", "or": "🦠 ରୋଗ ସତର୍କତା"},
    "btn_emergency": {"en": "🚑 Emergency", "hi": "🚑 आपातकाल", "te": "🚑 అత్యవసరం", "ta": "🚑 அவசரம்", "or": "🚑 ଜରୁରୀକାଳୀନ"},
    "btn_change_language": {"en": "🌐 Language", "hi": "🌐 भाषा", "te": "🌐 భాష", "ta": "🌐 மொழி", "or": "🌐 ଭାଷା"},
    "btn_more_options": {"en": "➕ More", "hi": "➕ और", "te": "➕ మరిన్ని", "ta": "➕ மேலும்", "or": "➕ ଅଧିକ"},
    "btn_back_to_menu": {"en": "⬅️ Main menu", "hi": "⬅️ मुख्य मेनू", "te": "⬅️ ప్రధాన మెను", "ta": "⬅️ முதன்மை", "or": "⬅️ ମୁଖ୍ୟ ମେନୁ"},
    "btn_view_active_diseases": {"en": "📊 Active diseases", "hi": "📊 सक्रिय रोग", "te": "📊 ప్రస్తుత వ్యాధులు", "ta": "📊 தற்போதைய நோய்கள்", "or": "📊 ସକ୍ରିୟ ରୋଗ"},
    "btn_turn_on_alerts": {"en": "🔔 Turn on alerts", "hi": "🔔 अलर्ट चालू करें", "te": "🔔 హెచ్చరికలు ఆన్", "ta": "🔔 எச்சரிக்கை ஆன்", "or": "🔔 ସତର୍କତା ଚାଲୁ"},
    "btn_turn_off_alerts": {"en": "🔕 Turn off alerts", "hi": "🔕 अलर्ट बंद करें", "te": "🔕 హెచ్చరికలు ఆఫ్", "ta": "🔕 எச்சரிக்கை ஆஃப்", "or": "🔕 ସତର୍କତା ବନ୍ଦ"},
    "btn_confirm_delete_alert_data": {"en": "🗑️ Delete my data", "hi": "🗑️ मेरा डेटा हटाएँ", "te": "🗑️ నా డేటా తొలగించు", "ta": "🗑️ தரவை நீக்கு", "or": "🗑️ ମୋ ତଥ୍ୟ ହଟାନ୍ତୁ"},
    "btn_confirm_disable_alerts": {"en": "⏸️ Pause alerts", "hi": "⏸️ अलर्ट रोकें", "te": "⏸️ హెచ్చరికలు ఆపు", "ta": "⏸️ இடைநிறுத்து", "or": "⏸️ ସତର୍କତା ରୋକନ୍ତୁ"},
    "btn_open_menu": {"en": "Open menu", "hi": "मेनू खोलें", "te": "మెను తెరవండి", "ta": "பட்டியல் திற", "or": "ମେନୁ ଖୋଲନ୍ତୁ"},
    "btn_choose_state": {"en": "Choose state", "hi": "राज्य चुनें", "te": "రాష్ట్రం ఎంచుకోండి", "ta": "மாநிலம் தேர்வு", "or": "ରାଜ୍ୟ ବାଛନ୍ତୁ"},
    "btn_feedback_good": {"en": "👍 Helpful", "hi": "👍 उपयोगी", "te": "👍 ఉపయోగకరం", "ta": "👍 உதவியது", "or": "👍 ଉପଯୋଗୀ"},
    "btn_feedback_bad": {"en": "👎 Not helpful", "hi": "👎 उपयोगी नहीं", "te": "👎 ఉపయోగపడలేదు", "ta": "👎 உதவவில்லை", "or": "👎 ଉପଯୋଗୀ ନୁହେଁ"},
    "ai_chat_prompt": {
        "en": "🤖 Ask me any health question. Type *menu* to go back.",
        "hi": "🤖 कोई भी स्वास्थ्य प्रश्न पूछें। वापस जाने के लिए *menu* लिखें।",
        "te": "🤖 ఏదైనా ఆరోగ్య ప్రశ్న అడగండి. వెనక్కి వెళ్ళడానికి *menu* టైప్ చేయండి.",
        "ta": "🤖 எந்த சுகாதார கேள்வியையும் கேளுங்கள். திரும்ப *menu* என தட்டச்சு செய்யவும்.",
        "or": "🤖 ଯେକୌଣସି ସ୍ୱାସ୍ଥ୍ୟ ପ୍ରଶ୍ନ ପଚାରନ୍ତୁ। ଫେରିବାକୁ *menu* ଲେଖନ୍ତୁ।",
    },
    "symptom_check_prompt": {
        "en": "🩺 Describe your symptoms, how long you have had them and your age.",
        "hi": "🩺 अपने लक्षण, वे कब से हैं और अपनी उम्र बताएं।",
        "te": "🩺 మీ లక్షణాలు, అవి ఎంతకాలంగా ఉన్నాయి మరియు మీ వయస్సు తెలపండి.",
        "ta": "🩺 உங்கள் அறிகுறிகள், எவ்வளவு நாளாக உள்ளன, உங்கள் வயது ஆகியவற்றைக் கூறுங்கள்.",
        "or": "🩺 ଆପଣଙ୍କ ଲକ୍ଷଣ, କେବେଠାରୁ ଅଛି ଏବଂ ଆପଣଙ୍କ ବୟସ ଜଣାନ୍ତୁ।",
    },
    "preventive_tips_prompt": {
        "en": "🛡️ Which topic would you like prevention tips for? (for example: monsoon diseases, diabetes, hygiene)",
        "hi": "🛡️ किस विषय पर बचाव के सुझाव चाहिए? (जैसे: मानसून रोग, मधुमेह, स्वच्छता)",
        "te": "🛡️ ఏ అంశంపై నివారణ చిట్కాలు కావాలి? (ఉదా: వర్షాకాల వ్యాధులు, మధుమేహం, పరిశుభ్రత)",
        "ta": "🛡️ எந்த தலைப்பில் தடுப்பு குறிப்புகள் வேண்டும்? (எ.கா: மழைக்கால நோய்கள், நீரிழிவு, சுகாதாரம்)",
        "or": "🛡️ କେଉଁ ବିଷୟରେ ପ୍ରତିଷେଧ ଟିପ୍ସ ଦରକାର? (ଯେପରି: ବର୍ଷା ରୋଗ, ମଧୁମେହ, ସଫାସୁତୁରା)",
    },
    "emergency": {
        "en": "🚑 *Emergency*\nCall {number} for an ambulance now. If someone is unconscious, not breathing or bleeding heavily, do not wait.",
        "hi": "🚑 *आपातकाल*\nएम्बुलेंस के लिए तुरंत {number} पर कॉल करें। बेहोशी, साँस न आना या अधिक रक्तस्राव हो तो प्रतीक्षा न करें।",
        "te": "🚑 *అత్యవసరం*\nఅంబులెన్స్ కోసం వెంటనే {number} కి కాల్ చేయండి. స్పృహ లేకపోయినా, శ్వాస ఆడకపోయినా, ఎక్కువ రక్తస్రావం ఉన్నా ఆలస్యం చేయవద్దు.",
        "ta": "🚑 *அவசரம்*\nஆம்புலன்ஸுக்கு உடனே {number} அழைக்கவும். மயக்கம், மூச்சு இல்லாமை அல்லது அதிக இரத்தப்போக்கு இருந்தால் தாமதிக்க வேண்டாம்.",
        "or": "🚑 *ଜରୁରୀକାଳୀନ*\nଆମ୍ବୁଲାନ୍ସ ପାଇଁ ତୁରନ୍ତ {number} କୁ କଲ କରନ୍ତୁ। ଚେତା ନଥିଲେ, ନିଶ୍ୱାସ ନ ନେଲେ କିମ୍ବା ଅଧିକ ରକ୍ତସ୍ରାବ ହେଲେ ଅପେକ୍ଷା କରନ୍ତୁ ନାହିଁ।",
    },
    "disease_alerts_menu": {
        "en": "🦠 *Disease Alerts*\nSee current outbreaks or get alerts for your state.",
        "hi": "🦠 *रोग अलर्ट*\nवर्तमान प्रकोप देखें या अपने राज्य के अलर्ट पाएं।",
        "te": "🦠 *వ్యాధి హెచ్చరికలు*\nప్రస్తుత వ్యాప్తిని చూడండి లేదా మీ రాష్ట్రానికి హెచ్చరికలు పొందండి.",
        "ta": "🦠 *நோய் எச்சரிக்கைகள்*\nதற்போதைய பரவலைப் பார்க்கவும் அல்லது உங்கள் மாநில எச்சரிக்கைகளைப் பெறவும்.",
        "or": "🦠 *ରୋଗ ସତର୍କତା*\nବର୍ତ୍ତମାନର ପ୍ରକୋପ ଦେଖନ୍ତୁ କିମ୍ବା ଆପଣଙ୍କ ରାଜ୍ୟ ପାଇଁ ସତର୍କତା ପାଆନ୍ତୁ।",
    },
    "select_state": {
        "en": "📍 Choose your state from the list, or type it as *State, District, Pincode*.",
        "hi": "📍 सूची से अपना राज्य चुनें, या *राज्य, जिला, पिनकोड* लिखें।",
        "te": "📍 జాబితా నుండి మీ రాష్ట్రాన్ని ఎంచుకోండి, లేదా *రాష్ట్రం, జిల్లా, పిన్‌కోడ్* టైప్ చేయండి.",
        "ta": "📍 பட்டியலில் இருந்து மாநிலத்தைத் தேர்ந்தெடுக்கவும், அல்லது *மாநிலம், மாவட்டம், பின்கோடு* என தட்டச்சு செய்யவும்.",
        "or": "📍 ତାଲିକାରୁ ଆପଣଙ୍କ ରାଜ୍ୟ ବାଛନ୍ତୁ, କିମ୍ବା *ରାଜ୍ୟ, ଜିଲ୍ଲା, ପିନକୋଡ* ଲେଖନ୍ତୁ।",
    },
    "alerts_registered": {
        "en": "✅ *Alerts turned on* for {location}.\nYou will get outbreak updates for your area. Reply *STOP ALERTS* anytime to pause them.",
        "hi": "✅ {location} के लिए *अलर्ट चालू* हो गए।\nआपको अपने क्षेत्र के प्रकोप अपडेट मिलेंगे। रोकने के लिए *STOP ALERTS* लिखें।",
        "te": "✅ {location} కోసం *హెచ్చరికలు ఆన్* అయ్యాయి.\nమీ ప్రాంత వ్యాప్తి సమాచారం అందుతుంది. ఆపడానికి *STOP ALERTS* అని పంపండి.",
        "ta": "✅ {location} க்கான *எச்சரிக்கைகள் இயக்கப்பட்டன*.\nஉங்கள் பகுதியின் பரவல் தகவல்கள் வரும். நிறுத்த *STOP ALERTS* அனுப்பவும்.",
        "or": "✅ {location} ପାଇଁ *ସତର୍କତା ଚାଲୁ* ହେଲା।\nଆପଣଙ୍କ ଅଞ୍ଚଳର ପ୍ରକୋପ ସୂଚନା ମିଳିବ। ବନ୍ଦ କରିବାକୁ *STOP ALERTS* ପଠାନ୍ତୁ।",
    },
    "already_registered": {
        "en": "🔔 You are already receiving alerts for {state}.",
        "hi": "🔔 आपको पहले से {state} के अलर्ट मिल रहे हैं।",
        "te": "🔔 మీరు ఇప్పటికే {state} హెచ్చరికలు పొందుతున్నారు.",
        "ta": "🔔 நீங்கள் ஏற்கனவே {state} எச்சரிக்கைகளைப் பெறுகிறீர்கள்.",
        "or": "🔔 ଆପଣ ପୂର୍ବରୁ {state} ର ସତର୍କତା ପାଉଛନ୍ତି।",
    },
    "state_not_found": {
        "en": "❓ I couldn't find the state \"{state}\". Please pick it from the list or check the spelling.",
        "hi": "❓ \"{state}\" राज्य नहीं मिला। कृपया सूची से चुनें या वर्तनी जाँचें।",
        "te": "❓ \"{state}\" రాష్ట్రం కనబడలేదు. జాబితా నుండి ఎంచుకోండి లేదా స్పెల్లింగ్ సరిచూడండి.",
        "ta": "❓ \"{state}\" மாநிலம் கிடைக்கவில்லை. பட்டியலில் இருந்து தேர்ந்தெடுக்கவும் அல்லது எழுத்துப்பிழையைச் சரிபார்க்கவும்.",
        "or": "❓ \"{state}\" ରାଜ୍ୟ ମିଳିଲା ନାହିଁ। ତାଲିକାରୁ ବାଛନ୍ତୁ କିମ୍ବା ବନାନ ଯାଞ୍ଚ କରନ୍ତୁ।",
    },
    "turn_off_confirm": {
        "en": "🔕 Do you want to pause alerts (keep your location) or delete your alert data completely?",
        "hi": "🔕 क्या आप अलर्ट रोकना (स्थान सहेजा रहेगा) या अपना अलर्ट डेटा पूरी तरह हटाना चाहते हैं?",
        "te": "🔕 హెచ్చరికలు ఆపాలా (స్థానం ఉంచబడుతుంది) లేక మీ హెచ్చరిక డేటాను పూర్తిగా తొలగించాలా?",
        "ta": "🔕 எச்சரிக்கைகளை இடைநிறுத்தவா (இடம் வைக்கப்படும்) அல்லது தரவை முழுவதும் நீக்கவா?",
        "or": "🔕 ସତର୍କତା ରୋକିବେ (ସ୍ଥାନ ରହିବ) ନା ଆପଣଙ୍କ ସତର୍କତା ତଥ୍ୟ ସମ୍ପୂର୍ଣ୍ଣ ହଟାଇବେ?",
    },
    "alerts_disabled": {
        "en": "⏸️ Alerts paused. Your location is saved; choose *Turn on alerts* to resume.",
        "hi": "⏸️ अलर्ट रोक दिए गए। आपका स्थान सहेजा है; फिर से शुरू करने के लिए *अलर्ट चालू करें* चुनें।",
        "te": "⏸️ హెచ్చరికలు ఆపబడ్డాయి. మీ స్థానం సేవ్ చేయబడింది; మళ్ళీ ప్రారంభించడానికి *హెచ్చరికలు ఆన్* ఎంచుకోండి.",
        "ta": "⏸️ எச்சரிக்கைகள் இடைநிறுத்தப்பட்டன. உங்கள் இடம் சேமிக்கப்பட்டுள்ளது; மீண்டும் தொடங்க *எச்சரிக்கை ஆன்* தேர்ந்தெடுக்கவும்.",
        "or": "⏸️ ସତର୍କତା ରୋକାଗଲା। ଆପଣଙ୍କ ସ୍ଥାନ ସଞ୍ଚିତ ଅଛି; ପୁଣି ଆରମ୍ଭ କରିବାକୁ *ସତର୍କତା ଚାଲୁ* ବାଛନ୍ତୁ।",
    },
    "alerts_deleted": {
        "en": "🗑️ Your alert data has been deleted. You will not receive any more alerts.",
        "hi": "🗑️ आपका अलर्ट डेटा हटा दिया गया है। अब आपको कोई अलर्ट नहीं मिलेगा।",
        "te": "🗑️ మీ హెచ్చరిక డేటా తొలగించబడింది. ఇకపై హెచ్చరికలు రావు.",
        "ta": "🗑️ உங்கள் எச்சரிக்கை தரவு நீக்கப்பட்டது. இனி எச்சரிக்கைகள் வராது.",
        "or": "🗑️ ଆପଣଙ୍କ ସତର୍କତା ତଥ୍ୟ ହଟାଗଲା। ଆଉ ସତର୍କତା ଆସିବ ନାହିଁ।",
    },
    "not_registered": {
        "en": "ℹ️ You are not subscribed to alerts.",
        "hi": "ℹ️ आपने अलर्ट की सदस्यता नहीं ली है।",
        "te": "ℹ️ మీరు హెచ్చరికలకు సభ్యత్వం పొందలేదు.",
        "ta": "ℹ️ நீங்கள் எச்சரிக்கைகளுக்கு பதிவு செய்யவில்லை.",
        "or": "ℹ️ ଆପଣ ସତର୍କତା ପାଇଁ ପଞ୍ଜୀକୃତ ନୁହଁନ୍ତି।",
    },
    "outbreak_header": {
        "en": "🦠 *Current disease outbreaks* ({location})",
        "hi": "🦠 *वर्तमान रोग प्रकोप* ({location})",
        "te": "🦠 *ప్రస్తుత వ్యాధి వ్యాప్తి* ({location})",
        "ta": "🦠 *தற்போதைய நோய் பரவல்* ({location})",
        "or": "🦠 *ବର୍ତ୍ତମାନର ରୋଗ ପ୍ରକୋପ* ({location})",
    },
    "national_header": {
        "en": "🇮🇳 *Elsewhere in India*",
        "hi": "🇮🇳 *भारत में अन्यत्र*",
        "te": "🇮🇳 *భారతదేశంలో ఇతర ప్రాంతాలు*",
        "ta": "🇮🇳 *இந்தியாவின் பிற பகுதிகள்*",
        "or": "🇮🇳 *ଭାରତର ଅନ୍ୟ ସ୍ଥାନ*",
    },
    "alert_header": {
        "en": "🔔 *Disease outbreak alert for {location}*",
        "hi": "🔔 *{location} के लिए रोग प्रकोप अलर्ट*",
        "te": "🔔 *{location} కోసం వ్యాధి వ్యాప్తి హెచ్చరిక*",
        "ta": "🔔 *{location} க்கான நோய் பரவல் எச்சரிக்கை*",
        "or": "🔔 *{location} ପାଇଁ ରୋଗ ପ୍ରକୋପ ସତର୍କତା*",
    },
    "morning_header": {
        "en": "🌅 *Good morning! Today's health update for {location}*",
        "hi": "🌅 *सुप्रभात! {location} के लिए आज का स्वास्थ्य अपडेट*",
        "te": "🌅 *శుభోదయం! {location} కోసం నేటి ఆరోగ్య సమాచారం*",
        "ta": "🌅 *காலை வணக்கம்! {location} க்கான இன்றைய சுகாதார தகவல்*",
        "or": "🌅 *ସୁପ୍ରଭାତ! {location} ପାଇଁ ଆଜିର ସ୍ୱାସ୍ଥ୍ୟ ସୂଚନା*",
    },
    "alert_footer": {
        "en": "Reply *STOP ALERTS* to unsubscribe. Emergency: {number}",
        "hi": "सदस्यता समाप्त करने के लिए *STOP ALERTS* लिखें। आपातकाल: {number}",
        "te": "సభ్యత్వం రద్దుకు *STOP ALERTS* పంపండి. అత్యవసరం: {number}",
        "ta": "பதிவை நிறுத்த *STOP ALERTS* அனுப்பவும். அவசரம்: {number}",
        "or": "ସଦସ୍ୟତା ବନ୍ଦ ପାଇଁ *STOP ALERTS* ପଠାନ୍ତୁ। ଜରୁରୀକାଳୀନ: {number}",
    },
    "no_outbreaks": {
        "en": "✅ No major disease outbreaks are reported right now.",
        "hi": "✅ अभी कोई बड़ा रोग प्रकोप दर्ज नहीं है।",
        "te": "✅ ప్రస్తుతం పెద్ద వ్యాధి వ్యాప్తి నివేదికలు లేవు.",
        "ta": "✅ தற்போது பெரிய நோய் பரவல் எதுவும் பதிவாகவில்லை.",
        "or": "✅ ବର୍ତ୍ତମାନ କୌଣସି ବଡ଼ ରୋଗ ପ୍ରକୋପ ରିପୋର୍ଟ ହୋଇନାହିଁ।",
    },
    "apology": {
        "en": "😔 Sorry, I couldn't get the latest outbreak information right now. Please try again later.",
        "hi": "😔 क्षमा करें, अभी नवीनतम प्रकोप जानकारी नहीं मिल सकी। कृपया बाद में पुनः प्रयास करें।",
        "te": "😔 క్షమించండి, ప్రస్తుతం తాజా వ్యాప్తి సమాచారం పొందలేకపోయాను. దయచేసి తర్వాత మళ్ళీ ప్రయత్నించండి.",
        "ta": "😔 மன்னிக்கவும், தற்போது சமீபத்திய பரவல் தகவலைப் பெற முடியவில்லை. பின்னர் மீண்டும் முயற்சிக்கவும்.",
        "or": "😔 କ୍ଷମା କରନ୍ତୁ, ବର୍ତ୍ତମାନ ନୂତନ ପ୍ରକୋପ ସୂଚନା ମିଳିପାରିଲା ନାହିଁ। ଦୟାକରି ପରେ ପୁଣି ଚେଷ୍ଟା କରନ୍ତୁ।",
    },
    "general_prevention_tips": {
        "en": "🛡️ *General prevention tips*\n• Wash hands with soap often\n• Drink boiled or filtered water\n• Remove standing water around your home\n• Cover coughs and sneezes\n• See a doctor if fever lasts more than 2 days",
        "hi": "🛡️ *सामान्य बचाव के सुझाव*\n• साबुन से बार-बार हाथ धोएं\n• उबला या फ़िल्टर किया पानी पिएं\n• घर के आसपास रुका पानी हटाएं\n• खाँसते-छींकते समय मुँह ढकें\n• 2 दिन से अधिक बुखार हो तो डॉक्टर को दिखाएं",
        "te": "🛡️ *సాధారణ నివారణ చిట్కాలు*\n• సబ్బుతో తరచుగా చేతులు కడుక్కోండి\n• మరిగించిన లేదా ఫిల్టర్ చేసిన నీరు త్రాగండి\n• ఇంటి చుట్టూ నిల్వ నీరు తొలగించండి\n• దగ్గు, తుమ్ములప్పుడు నోరు కప్పుకోండి\n• జ్వరం 2 రోజులకు మించితే వైద్యుడిని సంప్రదించండి",
        "ta": "🛡️ *பொது தடுப்பு குறிப்புகள்*\n• சோப்பால் அடிக்கடி கைகளைக் கழுவவும்\n• கொதித்த அல்லது வடிகட்டிய நீரைக் குடிக்கவும்\n• வீட்டைச் சுற்றி தேங்கிய நீரை அகற்றவும்\n• இருமல், தும்மலின் போது வாயை மூடவும்\n• காய்ச்சல் 2 நாட்களுக்கு மேல் இருந்தால் மருத்துவரை அணுகவும்",
        "or": "🛡️ *ସାଧାରଣ ପ୍ରତିଷେଧ ଟିପ୍ସ*\n• ସାବୁନରେ ବାରମ୍ବାର ହାତ ଧୁଅନ୍ତୁ\n• ଫୁଟାଇଥିବା କିମ୍ବା ଫିଲ୍ଟର ପାଣି ପିଅନ୍ତୁ\n• ଘର ଆଖପାଖରେ ଜମା ପାଣି ହଟାନ୍ତୁ\n• କାଶ ଓ ଛିଙ୍କ ବେଳେ ମୁହଁ ଘୋଡାନ୍ତୁ\n• ଜ୍ୱର 2 ଦିନରୁ ଅଧିକ ରହିଲେ ଡାକ୍ତର ଦେଖାନ୍ତୁ",
    },
    "prevention_header": {
        "en": "🛡️ *Prevention for current outbreaks*",
        "hi": "🛡️ *वर्तमान प्रकोपों से बचाव*",
        "te": "🛡️ *ప్రస్తుత వ్యాప్తికి నివారణ*",
        "ta": "🛡️ *தற்போதைய பரவலுக்கான தடுப்பு*",
        "or": "🛡️ *ବର୍ତ୍ତମାନର ପ୍ରକୋପ ପାଇଁ ପ୍ରତିଷେଧ*",
    },
    "prevention_vector_borne": {
        "en": "🦟 *Mosquito protection:* use bed nets and repellent, remove stagnant water",
        "hi": "🦟 *मच्छर सुरक्षा:* मच्छरदानी और रिपेलेंट का उपयोग करें, रुका पानी हटाएं",
        "te": "🦟 *దోమల రక్షణ:* దోమతెరలు, రిపెల్లెంట్ వాడండి, నిల్వ నీరు తొలగించండి",
        "ta": "🦟 *கொசு பாதுகாப்பு:* கொசு வலை, விரட்டி பயன்படுத்தவும், தேங்கிய நீரை அகற்றவும்",
        "or": "🦟 *ମଶା ସୁରକ୍ଷା:* ମଶାରି ଓ ରିପେଲେଣ୍ଟ ବ୍ୟବହାର କରନ୍ତୁ, ଜମା ପାଣି ହଟାନ୍ତୁ",
    },
    "prevention_respiratory": {
        "en": "😷 *Respiratory protection:* wear a mask, avoid crowds, keep rooms ventilated",
        "hi": "😷 *श्वसन सुरक्षा:* मास्क पहनें, भीड़ से बचें, कमरों में हवा आने दें",
        "te": "😷 *శ్వాసకోశ రక్షణ:* మాస్క్ ధరించండి, గుంపులను నివారించండి, గదుల్లో గాలి ఆడనివ్వండి",
        "ta": "😷 *சுவாச பாதுகாப்பு:* முகக்கவசம் அணியவும், கூட்டத்தைத் தவிர்க்கவும், காற்றோட்டம் வைக்கவும்",
        "or": "😷 *ଶ୍ୱାସ ସୁରକ୍ଷା:* ମାସ୍କ ପିନ୍ଧନ୍ତୁ, ଭିଡ଼ ଏଡ଼ାନ୍ତୁ, ଘରେ ପବନ ଚଳାଚଳ ରଖନ୍ତୁ",
    },
    "prevention_water_borne": {
        "en": "💧 *Water safety:* drink boiled or filtered water, avoid street food, wash hands",
        "hi": "💧 *पानी की सुरक्षा:* उबला या फ़िल्टर पानी पिएं, स्ट्रीट फूड से बचें, हाथ धोएं",
        "te": "💧 *నీటి భద్రత:* మరిగించిన లేదా ఫిల్టర్ నీరు త్రాగండి, వీధి ఆహారం మానండి, చేతులు కడుక్కోండి",
        "ta": "💧 *நீர் பாதுகாப்பு:* கொதித்த அல்லது வடிகட்டிய நீர் குடிக்கவும், தெரு உணவைத் தவிர்க்கவும், கை கழுவவும்",
        "or": "💧 *ପାଣି ସୁରକ୍ଷା:* ଫୁଟା କିମ୍ବା ଫିଲ୍ଟର ପାଣି ପିଅନ୍ତୁ, ରାସ୍ତା ଖାଦ୍ୟ ଏଡ଼ାନ୍ତୁ, ହାତ ଧୁଅନ୍ତୁ",
    },
    "prevention_food_borne": {
        "en": "🍽️ *Food safety:* eat freshly cooked food, avoid raw items, keep the kitchen clean",
        "hi": "🍽️ *भोजन सुरक्षा:* ताज़ा पका खाना खाएं, कच्चा खाने से बचें, रसोई साफ रखें",
        "te": "🍽️ *ఆహార భద్రత:* తాజాగా వండిన ఆహారం తినండి, పచ్చివి మానండి, వంటగది శుభ్రంగా ఉంచండి",
        "ta": "🍽️ *உணவு பாதுகாப்பு:* புதிதாக சமைத்த உணவு உண்ணவும், பச்சை உணவைத் தவிர்க்கவும், சமையலறையைச் சுத்தமாக வைக்கவும்",
        "or": "🍽️ *ଖାଦ୍ୟ ସୁରକ୍ଷା:* ତାଜା ରନ୍ଧା ଖାଦ୍ୟ ଖାଆନ୍ତୁ, କଞ୍ଚା ଜିନିଷ ଏଡ଼ାନ୍ତୁ, ରୋଷେଇ ଘର ସଫା ରଖନ୍ତୁ",
    },
    "prevention_contact": {
        "en": "🤝 *Contact prevention:* don't share personal items, keep good personal hygiene",
        "hi": "🤝 *संपर्क से बचाव:* निजी वस्तुएं साझा न करें, व्यक्तिगत स्वच्छता रखें",
        "te": "🤝 *సంపర్క నివారణ:* వ్యక్తిగత వస్తువులు పంచుకోవద్దు, వ్యక్తిగత పరిశుభ్రత పాటించండి",
        "ta": "🤝 *தொடர்பு தடுப்பு:* தனிப்பட்ட பொருட்களைப் பகிர வேண்டாம், தனிப்பட்ட சுகாதாரம் பேணவும்",
        "or": "🤝 *ସଂସ୍ପର୍ଶ ପ୍ରତିଷେଧ:* ବ୍ୟକ୍ତିଗତ ଜିନିଷ ବାଣ୍ଟନ୍ତୁ ନାହିଁ, ବ୍ୟକ୍ତିଗତ ସଫାସୁତୁରା ରଖନ୍ତୁ",
    },
    "prevention_zoonotic": {
        "en": "🐾 *Animal safety:* avoid sick animals and fruit bitten by bats, cook meat thoroughly",
        "hi": "🐾 *पशु सुरक्षा:* बीमार जानवरों और चमगादड़ द्वारा कुतरे फलों से बचें, मांस अच्छी तरह पकाएं",
        "te": "🐾 *జంతు భద్రత:* అనారోగ్య జంతువులు, గబ్బిలాలు కొరికిన పండ్లకు దూరంగా ఉండండి, మాంసం బాగా ఉడికించండి",
        "ta": "🐾 *விலங்கு பாதுகாப்பு:* நோயுள்ள விலங்குகள், வௌவால் கடித்த பழங்களைத் தவிர்க்கவும், இறைச்சியை நன்கு சமைக்கவும்",
        "or": "🐾 *ପଶୁ ସୁରକ୍ଷା:* ଅସୁସ୍ଥ ପଶୁ ଓ ବାଦୁଡ଼ି କାମୁଡ଼ା ଫଳ ଏଡ଼ାନ୍ତୁ, ମାଂସ ଭଲ ଭାବେ ରାନ୍ଧନ୍ତୁ",
    },
    "prevention_medical_care": {
        "en": "🏥 *Medical care:* get help quickly if symptoms appear, follow your doctor's advice",
        "hi": "🏥 *चिकित्सा देखभाल:* लक्षण दिखें तो तुरंत सहायता लें, डॉक्टर की सलाह मानें",
        "te": "🏥 *వైద్య సేవ:* లక్షణాలు కనిపిస్తే వెంటనే సహాయం పొందండి, వైద్యుల సలహా పాటించండి",
        "ta": "🏥 *மருத்துவ பராமரிப்பு:* அறிகுறிகள் தோன்றினால் உடனே உதவி பெறவும், மருத்துவர் ஆலோசனையைப் பின்பற்றவும்",
        "or": "🏥 *ଚିକିତ୍ସା ସେବା:* ଲକ୍ଷଣ ଦେଖାଗଲେ ତୁରନ୍ତ ସାହାଯ୍ୟ ନିଅନ୍ତୁ, ଡାକ୍ତରଙ୍କ ପରାମର୍ଶ ମାନନ୍ତୁ",
    },
    "error_message": {
        "en": "⚠️ Something went wrong. Please try again, or type *menu*.",
        "hi": "⚠️ कुछ गलत हो गया। कृपया फिर से प्रयास करें, या *menu* लिखें।",
        "te": "⚠️ ఏదో పొరపాటు జరిగింది. మళ్ళీ ప్రయత్నించండి, లేదా *menu* టైప్ చేయండి.",
        "ta": "⚠️ ஏதோ தவறு நடந்தது. மீண்டும் முயற்சிக்கவும், அல்லது *menu* என தட்டச்சு செய்யவும்.",
        "or": "⚠️ କିଛି ଭୁଲ ହେଲା। ପୁଣି ଚେଷ୍ଟା କରନ୍ତୁ, କିମ୍ବା *menu* ଲେଖନ୍ତୁ।",
    },
    "ai_unavailable": {
        "en": "😔 The AI assistant is not available right now. Please try again in a few minutes.",
        "hi": "😔 AI सहायक अभी उपलब्ध नहीं है। कृपया कुछ मिनट बाद प्रयास करें।",
        "te": "😔 AI సహాయకుడు ప్రస్తుతం అందుబాటులో లేదు. కొన్ని నిమిషాల తర్వాత ప్రయత్నించండి.",
        "ta": "😔 AI உதவியாளர் தற்போது கிடைக்கவில்லை. சில நிமிடங்களில் மீண்டும் முயற்சிக்கவும்.",
        "or": "😔 AI ସହାୟକ ବର୍ତ୍ତମାନ ଉପଲବ୍ଧ ନାହିଁ। କିଛି ମିନିଟ ପରେ ଚେଷ୍ଟା କରନ୍ତୁ।",
    },
    "media_received": {
        "en": "📎 I received your file. To get a photo checked, open *Check symptoms* or *Ask AI* and send it there. Otherwise please describe your question in a message.",
        "hi": "📎 आपकी फ़ाइल मिल गई। फ़ोटो की जाँच के लिए *लक्षण जाँच* या *AI से पूछें* खोलकर वहाँ भेजें। अन्यथा अपना प्रश्न संदेश में लिखें।",
        "te": "📎 మీ ఫైల్ అందింది. ఫోటో పరిశీలన కోసం *లక్షణాల పరిశీలన* లేదా *AI ని అడగండి* తెరిచి అక్కడ పంపండి. లేకపోతే మీ ప్రశ్నను సందేశంలో రాయండి.",
        "ta": "📎 உங்கள் கோப்பு கிடைத்தது. புகைப்படத்தைச் சரிபார்க்க *அறிகுறி சோதனை* அல்லது *AI-யிடம் கேள்* திறந்து அங்கே அனுப்பவும். இல்லையெனில் உங்கள் கேள்வியைச் செய்தியாக எழுதவும்.",
        "or": "📎 ଆପଣଙ୍କ ଫାଇଲ ମିଳିଲା। ଫଟୋ ଯାଞ୍ଚ ପାଇଁ *ଲକ୍ଷଣ ଯାଞ୍ଚ* କିମ୍ବା *AI କୁ ପଚାରନ୍ତୁ* ଖୋଲି ସେଠାରେ ପଠାନ୍ତୁ। ନହେଲେ ଆପଣଙ୍କ ପ୍ରଶ୍ନ ସନ୍ଦେଶରେ ଲେଖନ୍ତୁ।",
    },
    "feedback_prompt": {
        "en": "Was this answer helpful?",
        "hi": "क्या यह उत्तर उपयोगी था?",
        "te": "ఈ సమాధానం ఉపయోగపడిందా?",
        "ta": "இந்தப் பதில் உதவியாக இருந்ததா?",
        "or": "ଏହି ଉତ୍ତର ଉପଯୋଗୀ ଥିଲା କି?",
    },
    "feedback_thanks": {
        "en": "🙏 Thank you for your feedback! You can keep asking questions.",
        "hi": "🙏 आपकी प्रतिक्रिया के लिए धन्यवाद! आप और प्रश्न पूछ सकते हैं।",
        "te": "🙏 మీ అభిప్రాయానికి ధన్యవాదాలు! మీరు ప్రశ్నలు అడుగుతూ ఉండవచ్చు.",
        "ta": "🙏 உங்கள் கருத்துக்கு நன்றி! நீங்கள் தொடர்ந்து கேள்விகள் கேட்கலாம்.",
        "or": "🙏 ଆପଣଙ୍କ ମତାମତ ପାଇଁ ଧନ୍ୟବାଦ! ଆପଣ ପ୍ରଶ୍ନ ପଚାରିବା ଜାରି ରଖିପାରିବେ।",
    },
}


def normalize_language(language):
    language = (language or "").lower()
    return language if language in SUPPORTED_LANGUAGES else settings.DEFAULT_LANGUAGE


def get_text(key, language="en", **kwargs):
    """Look up a localized string, falling back to English, then to the key itself"""
    variants = TEXTS.get(key)
    if not variants:
        return key
    text = variants.get(normalize_language(language)) or variants["en"]
    return text.format(**kwargs) if kwargs else text
