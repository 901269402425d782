"""Bundled sample script variants, in the producer's JSON layout."""

from .models import ScriptVariant

SAMPLE_VARIANTS: list[dict] = [
    {
        "variant_id": "v1",
        "duration_s": 20,
        "sources": [
            {"title": "Blender Community Forum - File Recovery Tips", "uri": "#"},
            {"title": "How to Find Hidden AppData Files in Windows", "uri": "#"},
        ],
        "loopability_analysis": {
            "score": 9,
            "analysis": (
                "The final caption 'It's right where you started' prompts the viewer "
                "to re-watch from the beginning to find the 'secret'."
            ),
            "transition_point_analysis": {
                "last_event_visual": "Character reacts with relief as the scene is restored.",
                "first_event_visual": "Extreme close-up on a face, eyes wide with panic.",
                "visual_match_score": 9,
                "last_event_audio": "A triumphant 'tada' with cheering.",
                "first_event_audio": "A sudden, sharp impact sound effect.",
                "audio_match_score": 8,
                "suggestion_for_improvement": (
                    "Fade the cheer into a quick whoosh that leads into the impact sound."
                ),
            },
        },
        "timeline": [
            {"sec_start": 0, "sec_end": 1, "visual": "close_face_shock", "audio": "impact_sfx",
             "caption": "My Blender scene just deleted itself",
             "triggers": ["hook", "shock"], "suggested_triggers": ["poignant_pov"], "isWeak": False},
            {"sec_start": 1, "sec_end": 3, "visual": "screen_record_error_message", "audio": "glitch_loop",
             "caption": "Here's what happened...",
             "triggers": ["context", "curiosity_question"], "suggested_triggers": [], "isWeak": False},
            {"sec_start": 3, "sec_end": 5, "visual": "fast_mouse_clicks", "audio": "fast_typing_sfx",
             "caption": "I tried everything to recover it",
             "triggers": [],
             "suggested_triggers": ["jump_cut", "text_overlay_bold", "music_cue", "sound_effect"],
             "isWeak": True},
            {"sec_start": 5, "sec_end": 8, "visual": "POV_looking_at_code", "audio": "thinking_music",
             "caption": "But the autosaves were all corrupted.",
             "triggers": ["poignant_pov"], "suggested_triggers": ["shock", "quick_zoom"], "isWeak": True},
            {"sec_start": 8, "sec_end": 11, "visual": "jump_cut_to_solution_in_UI", "audio": "aha_moment_sfx",
             "caption": "Then I found this ONE hidden file.",
             "triggers": ["jump_cut", "surprise_reveal"], "suggested_triggers": ["music_cue"], "isWeak": False},
            {"sec_start": 11, "sec_end": 14, "visual": "dragging_file_to_blender_icon",
             "audio": "hopeful_music_swell", "caption": "Could this actually work?",
             "triggers": [], "suggested_triggers": ["curiosity_question", "pattern_interrupt"], "isWeak": True},
            {"sec_start": 14, "sec_end": 17, "visual": "blender_loading_screen", "audio": "suspense_drone",
             "caption": "The moment of truth...",
             "triggers": ["music_cue"], "suggested_triggers": [], "isWeak": False},
            {"sec_start": 17, "sec_end": 20, "visual": "full_scene_restored_reaction",
             "audio": "tada_sfx_and_cheer",
             "caption": "Want to know the secret? It's right where you started.",
             "triggers": ["cta", "loop_hint"], "suggested_triggers": ["surprise_reveal"], "isWeak": False},
        ],
    },
    {
        "variant_id": "v2",
        "duration_s": 22,
        "loopability_analysis": {
            "score": 7,
            "analysis": (
                "The closing call to action links back to the opening hook, "
                "encouraging viewers to re-evaluate the first statement."
            ),
            "transition_point_analysis": {
                "last_event_visual": "A character points at a 'subscribe' button.",
                "first_event_visual": "A rapid zoom-in on the Unity logo.",
                "visual_match_score": 6,
                "last_event_audio": "Upbeat tech music fades out.",
                "first_event_audio": "A sharp 'whoosh' sound effect.",
                "audio_match_score": 8,
                "suggestion_for_improvement": (
                    "Zoom out from the subscribe button and blur-pan into the logo zoom."
                ),
            },
        },
        "timeline": [
            {"sec_start": 0, "sec_end": 2, "visual": "quick_zoom_on_Unity_logo", "audio": "whoosh_sfx",
             "caption": "Stop making this mistake in Unity.",
             "triggers": ["hook", "quick_zoom"], "suggested_triggers": ["shock", "text_overlay_bold"],
             "isWeak": False},
            {"sec_start": 2, "sec_end": 5, "visual": "screen_record_of_messy_hierarchy",
             "audio": "disappointed_sound", "caption": "Does your project look like this?",
             "triggers": ["context", "poignant_pov"], "suggested_triggers": ["curiosity_question"],
             "isWeak": False},
            {"sec_start": 5, "sec_end": 8, "visual": "text_overlay_of_bad_code", "audio": "error_buzz",
             "caption": "And your code is probably even worse.",
             "triggers": ["text_overlay_bold"], "suggested_triggers": ["shock", "jump_cut"], "isWeak": True},
            {"sec_start": 8, "sec_end": 12, "visual": "jump_cut_to_clean_interface", "audio": "upbeat_tech_music",
             "caption": "Let me show you a 2-minute fix.",
             "triggers": ["jump_cut", "curiosity_question"], "suggested_triggers": [], "isWeak": False},
            {"sec_start": 12, "sec_end": 16, "visual": "fast-paced_typing_and_UI_clicks",
             "audio": "typing_sfx_on_beat", "caption": "We'll use a simple ScriptableObject pattern.",
             "triggers": ["music_cue"], "suggested_triggers": ["sound_effect", "pattern_interrupt"],
             "isWeak": True},
            {"sec_start": 16, "sec_end": 19, "visual": "side-by-side_before_and_after", "audio": "magic_chime_sfx",
             "caption": "Look at the difference. Clean and scalable!",
             "triggers": ["surprise_reveal"], "suggested_triggers": ["jump_cut"], "isWeak": False},
            {"sec_start": 19, "sec_end": 22, "visual": "pointing_at_subscribe_button",
             "audio": "upbeat_tech_music_fadeout",
             "caption": "Follow for more gamedev tips that will save you time.",
             "triggers": ["cta"], "suggested_triggers": [], "isWeak": False},
        ],
    },
]


def load_samples() -> list[ScriptVariant]:
    return [ScriptVariant.from_dict(data) for data in SAMPLE_VARIANTS]
