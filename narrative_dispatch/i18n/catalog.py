"""User-facing strings, keyed by locale then message key."""

CATALOGS = {
    "en_US": {
        "get_started.welcome": "Hi {first_name}! Welcome to the lighthouse.",
        "get_started.guidance": (
            "The storm has passed and the keeper is gone. "
            "Tap a button to explore, or type \"help\" at any time."
        ),
        "get_started.help": "What would you like to do?",
        "menu.open_door": "Open the door",
        "menu.suggestion": "Make a suggestion",
        "menu.help": "Get help",
        "menu.start_over": "Start over",
        "care.help": "help",
        "care.prompt": (
            "Hi {first_name}, this is {persona}. Tap a button to continue the "
            "story, or start from the beginning."
        ),
        "care.persona": "the lighthouse keeper",
        "care.continue": "Continue the story",
        "survey.suggestion": (
            "Thanks for the idea! Tell us what you would add to the story and "
            "we will read every word."
        ),
        "survey.rate": "How are you enjoying the story so far?",
        "survey.good": "Loving it",
        "survey.bad": "Not for me",
        "fallback.any": "Sorry, I didn't understand: \"{message}\".",
        "fallback.attachment": (
            "Thanks for the attachment! I can only follow text and buttons for now."
        ),
        "fallback.payload": "This is a default postback message for payload: {payload}!",
        "step1.door": (
            "The heavy door creaks open. A spiral staircase winds both up to the "
            "lamp room and down into the dark."
        ),
        "step1.door_again": "The door is already open. The stairs are waiting.",
        "step1.go_down": "Go downstairs",
        "step1.go_up": "Go upstairs",
        "step2.downstairs": (
            "The cellar smells of salt. A coil of rope hangs on a hook and a "
            "backpack lies on the floor."
        ),
        "step2.upstairs": (
            "The lamp room is cold. A narrow tunnel runs behind the lens and "
            "the window looks out over the rocks."
        ),
        "step2.examine_rope": "Examine the rope",
        "step2.examine_backpack": "Examine the backpack",
        "step2.enter_tunnel": "Enter the tunnel",
        "step2.break_window": "Break the window",
        "step3.rope": "The rope is long and strong enough to climb down the cliff.",
        "step3.backpack": "Inside the backpack: a flare and a folded map of the coast.",
        "step3.tunnel": (
            "The tunnel narrows until you can go no further. You will have to "
            "turn back and open the door again."
        ),
        "step3.window": (
            "Glass showers onto the rocks below. The wind howls through. There "
            "must be a safer way down."
        ),
        "step3.use_rope": "Use the rope",
        "step3.use_backpack": "Use the backpack",
        "step3.go_back": "Go back",
        "step4.rope": "You tie the rope to the railing and climb down to the beach.",
        "step4.backpack": "You light the flare. A fishing boat turns toward the shore.",
        "step4.escaped": "You escaped the lighthouse, {first_name}!",
        "step4.again": "Play again",
    },
}
