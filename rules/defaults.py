"""
Default Rules - Built-in conversation rules
===========================================

Used when no rules file is configured. Order matters: the first rule
whose pattern matches wins, and the last rule catches everything.
"""

DEFAULT_RULES = {
    "rules": [
        {
            "name": "greeting",
            "pattern": "?*x hello ?*y",
            "responses": [
                "Sup?",
                "Hey there",
            ],
        },
        {
            "name": "bye",
            "pattern": "bye",
            "responses": [
                "Adios!",
            ],
        },
        {
            "name": "goodbye",
            "pattern": "?*x goodbye ?*y",
            "responses": [
                "good bye",
            ],
        },
        {
            "name": "computer",
            "pattern": "?*x computer ?*y",
            "responses": [
                "Do computers worry you?",
                "What do you think about machines?",
                "Why do you mention computers?",
                "What do you think machines have to do with your problem?",
            ],
        },
        {
            "name": "name",
            "pattern": "?*x name ?*y",
            "responses": [
                "I am not interested in names",
            ],
        },
        {
            "name": "sorry",
            "pattern": "?*x sorry ?*y",
            "responses": [
                "Please don't apologize",
                "Apologies are not necessary",
                "What feelings do you have when you apologize?",
            ],
        },
        {
            "name": "remember",
            "pattern": "?*x i remember ?*y",
            "responses": [
                "Do you often think of ?*y ?",
                "Does thinking of ?*y bring anything else to mind?",
                "What else do you remember?",
                "Why do you recall ?*y right now?",
                "What in the present situation reminds you of ?*y ?",
            ],
        },
        {
            "name": "do-you-remember",
            "pattern": "?*x do you remember ?*y",
            "responses": [
                "Did you think I would forget ?*y ?",
                "Why do you think I should recall ?*y now?",
                "What about ?*y ?",
                "You mentioned ?*y",
            ],
        },
        {
            "name": "want",
            "pattern": "?*x i want ?*y",
            "responses": [
                "What would it mean if you got ?*y ?",
                "Why do you want ?*y ?",
                "Suppose you got ?*y soon",
            ],
        },
        {
            "name": "if",
            "pattern": "?*x if ?*y",
            "responses": [
                "Do you really think it is likely that ?*y ?",
                "Do you wish that ?*y ?",
                "What do you think about ?*y ?",
                "Really, if ?*y ?",
            ],
        },
        {
            "name": "dream",
            "pattern": "?*x i dreamt ?*y",
            "responses": [
                "Really, ?*y ?",
                "Have you ever fantasized ?*y while you were awake?",
                "Have you dreamt ?*y before?",
            ],
        },
        {
            "name": "i-was",
            "pattern": "?*x i was ?*y",
            "responses": [
                "Were you really?",
                "Perhaps I already knew you were ?*y",
                "Why do you tell me you were ?*y now?",
            ],
        },
        {
            "name": "was-i",
            "pattern": "?*x was i ?*y",
            "responses": [
                "What if you were ?*y ?",
                "Do you think you were ?*y ?",
                "What would it mean if you were ?*y ?",
            ],
        },
        {
            "name": "i-am",
            "pattern": "?*x i am ?*y",
            "responses": [
                "In what way are you ?*y ?",
                "Do you want to be ?*y ?",
                "How long have you been ?*y ?",
            ],
        },
        {
            "name": "am-i",
            "pattern": "?*x am i ?*y",
            "responses": [
                "Do you believe you are ?*y ?",
                "Would you want to be ?*y ?",
                "You wish I would tell you you are ?*y",
            ],
        },
        {
            "name": "you-are",
            "pattern": "?*x you are ?*y",
            "responses": [
                "What makes you think I am ?*y ?",
                "Does it please you to believe I am ?*y ?",
                "Perhaps you would like to be ?*y",
            ],
        },
        {
            "name": "i-feel",
            "pattern": "?*x i feel ?*y",
            "responses": [
                "Do you often feel ?*y ?",
                "Tell me more about feeling ?*y",
            ],
        },
        {
            "name": "i-felt",
            "pattern": "?*x i felt ?*y",
            "responses": [
                "What other feelings do you have?",
            ],
        },
        {
            "name": "because",
            "pattern": "?*x because ?*y",
            "responses": [
                "Is that the real reason?",
                "What other reasons might there be?",
                "Does that reason seem to explain anything else?",
            ],
        },
        {
            "name": "yes",
            "pattern": "?*x yes ?*y",
            "responses": [
                "You seem quite positive",
                "You are sure?",
                "I understand",
            ],
        },
        {
            "name": "no",
            "pattern": "?*x no ?*y",
            "responses": [
                "Why not?",
                "You are being a bit negative",
                "Are you saying no just to be negative?",
            ],
        },
        {
            "name": "family",
            "pattern": "?*x my mother ?*y",
            "responses": [
                "Tell me more about your family",
                "Who else in your family ?*y ?",
            ],
        },
        {
            "name": "everyone",
            "pattern": "?*x everyone ?*y",
            "responses": [
                "Can you think of anyone in particular?",
                "Who for example?",
                "You are thinking of a special person",
            ],
        },
        {
            "name": "always",
            "pattern": "?*x always ?*y",
            "responses": [
                "Can you think of a specific example?",
                "When?",
                "What incident are you thinking of?",
                "Really, always?",
            ],
        },
        {
            "name": "what",
            "pattern": "?*x what ?*y",
            "responses": [
                "Why do you ask?",
                "Does that question interest you?",
                "What is it you really want to know?",
                "What do you think?",
                "What comes to your mind when you ask that?",
            ],
        },
        {
            "name": "perhaps",
            "pattern": "?*x perhaps ?*y",
            "responses": [
                "You do not seem quite certain",
            ],
        },
        {
            "name": "catch-all",
            "pattern": "?*x",
            "responses": [
                "Very interesting",
                "I am not sure I understand you fully",
                "What does that suggest to you?",
                "Please continue",
                "Go on",
                "Do you feel strongly about discussing such things?",
            ],
        },
    ]
}
