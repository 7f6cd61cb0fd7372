from __future__ import annotations

from .types import GenerationOptions, MessagePart, ProviderRequest

JSON_ONLY = "Respond with ONLY the JSON object, no surrounding text."

AUDIENCE = (
    "The audience is students in rural Indian schools: use simple language, "
    "culturally relevant, relatable examples and nothing that needs resources "
    "a village classroom would not have."
)

# Which key inside ``content`` holds the playable items for each game type.
GAME_CONTENT_KEYS = {
    "quiz": "questions",
    "matching": "pairs",
    "word-search": "words",
    "fill-blanks": "sentences",
}

_GAME_INSTRUCTIONS = {
    "quiz": (
        "Create a fun quiz game about {topic} for Grade {grade}. Include 10 "
        "multiple choice questions with 4 options each and the correct answer. "
        'Put them in content.questions as objects with "question", "options" '
        'and "answer".'
    ),
    "matching": (
        "Create a matching game about {topic} for Grade {grade}. Provide 10 "
        "pairs of items to match, such as terms and definitions. Put them in "
        'content.pairs as objects with "left" and "right".'
    ),
    "word-search": (
        "Create a word search puzzle about {topic} for Grade {grade}. Provide "
        "15 key words related to the topic with a short hint for each. Put them "
        'in content.words as objects with "word" and "hint".'
    ),
    "fill-blanks": (
        "Create a fill-in-the-blanks game about {topic} for Grade {grade}. "
        "Provide 10 sentences with a blank marked as ___ and the missing word. "
        'Put them in content.sentences as objects with "sentence" and "answer", '
        "and add a content.wordBank array."
    ),
}

LESSON_PLAN_OPTIONS = GenerationOptions(temperature=0.7, max_tokens=2048)
WORKSHEET_OPTIONS = GenerationOptions(temperature=0.5, max_tokens=2048)
VISUAL_AID_OPTIONS = GenerationOptions(temperature=0.4, modalities=("TEXT", "IMAGE"))


def _require(**fields: str) -> None:
    for name, value in fields.items():
        if not value or not value.strip():
            raise ValueError(f"{name} must not be empty")


def _text_request(
    text: str,
    *,
    model: str | None = None,
    options: GenerationOptions | None = None,
) -> ProviderRequest:
    return ProviderRequest(
        model=model,
        parts=(MessagePart.from_text(text),),
        options=options or GenerationOptions(),
    )


def build_content_request(prompt: str, language: str) -> ProviderRequest:
    _require(prompt=prompt, language=language)
    return _text_request(
        "You are a helpful teaching assistant for teachers in India. "
        f"Generate educational content in {language}.\n\n"
        f"Request: {prompt}\n\n"
        "Please provide clear, culturally relevant, and engaging content "
        f"suitable for students in rural Indian schools, written entirely in {language}."
    )


def build_explanation_request(question: str, language: str) -> ProviderRequest:
    _require(question=question, language=language)
    return _text_request(
        f"You are a helpful teaching assistant. Answer this student's question in "
        f"{language} in a simple, clear way that is easy for children to understand. "
        "Use analogies and examples from everyday life in rural India.\n\n"
        f"Question: {question}\n\n"
        "Provide a clear explanation with simple examples and analogies that "
        "students can relate to."
    )


def build_game_request(topic: str, grade_level: str, game_type: str) -> ProviderRequest:
    _require(topic=topic, grade_level=grade_level, game_type=game_type)
    if game_type not in _GAME_INSTRUCTIONS:
        raise ValueError(f"unknown game type '{game_type}'")

    instruction = _GAME_INSTRUCTIONS[game_type].format(topic=topic, grade=grade_level)
    return _text_request(
        f"{instruction}\n\n"
        "Format the game as JSON:\n"
        "{\n"
        '  "title": "Game title",\n'
        '  "instructions": "How to play the game",\n'
        f'  "content": {{ "{GAME_CONTENT_KEYS[game_type]}": [ ... ] }}\n'
        "}\n\n"
        f"Make it engaging, educational and suitable for Grade {grade_level}. "
        f"{AUDIENCE}\n\n"
        f"{JSON_ONLY}"
    )


def build_lesson_plan_request(subject: str, grades: str, topics: str) -> ProviderRequest:
    _require(subject=subject, grades=grades, topics=topics)
    return _text_request(
        "You are an expert lesson planner for multi-grade classrooms in rural "
        "India. Create a detailed weekly lesson plan.\n\n"
        f"Subject: {subject}\n"
        f"Grade Levels: {grades}\n"
        f"Topics to Cover: {topics}\n\n"
        "Create a weekly plan (Monday-Friday) with:\n"
        "- Specific activities for each day\n"
        "- Time duration for each activity\n"
        "- Differentiation strategies for the different grade levels\n"
        "- Practical, low-resource activities suitable for rural classrooms\n\n"
        "Format the response as JSON with this structure:\n"
        "{\n"
        '  "week": "Week 1",\n'
        '  "days": [\n'
        '    {"day": "Monday", "activity": "activity description", '
        '"duration": "45 min", "notes": "differentiation notes"}\n'
        "  ]\n"
        "}\n\n"
        f"{AUDIENCE}\n\n"
        f"{JSON_ONLY}",
        options=LESSON_PLAN_OPTIONS,
    )


def build_worksheet_request(image_data: str, mime_type: str) -> ProviderRequest:
    _require(image_data=image_data, mime_type=mime_type)
    instructions = (
        "Analyze this textbook page and create 3 differentiated worksheet versions "
        "for the grade levels of a multi-grade classroom:\n\n"
        "1. Basic Level (Grades 1-2): simplified vocabulary, basic concepts, visual aids\n"
        "2. Intermediate Level (Grades 3-4): standard concepts as shown in the textbook\n"
        "3. Advanced Level (Grades 5-6): extended concepts, critical thinking questions\n\n"
        "For each level, provide the grade range, the difficulty level, a description "
        "of the adaptations and 3-5 specific questions or activities.\n\n"
        "Format as JSON:\n"
        "{\n"
        '  "worksheets": [\n'
        '    {"grade": "Grade 1-2", "difficulty": "Basic", "description": "description", '
        '"activities": ["activity1", "activity2", "activity3"]}\n'
        "  ]\n"
        "}\n\n"
        "Write the worksheets in the language of the textbook page. "
        f"{AUDIENCE}\n\n"
        f"{JSON_ONLY}"
    )
    return ProviderRequest(
        model=None,
        parts=(
            MessagePart.from_text(instructions),
            MessagePart.from_inline(mime_type, image_data),
        ),
        options=WORKSHEET_OPTIONS,
    )


def build_transcription_request(audio_data: str, mime_type: str) -> ProviderRequest:
    _require(audio_data=audio_data, mime_type=mime_type)
    return ProviderRequest(
        model=None,
        parts=(
            MessagePart.from_text(
                "Transcribe this recording of a student reading aloud exactly as "
                "spoken, including mistakes, repetitions and skipped words. Keep "
                "the language of the recording. Return ONLY the transcribed text, "
                "nothing else."
            ),
            MessagePart.from_inline(mime_type, audio_data),
        ),
    )


def build_assessment_request(expected_text: str, transcription: str) -> ProviderRequest:
    _require(expected_text=expected_text, transcription=transcription)
    return _text_request(
        "You are an expert reading teacher for primary school children in rural "
        "India. Compare the expected text with the student's reading transcription "
        "and provide a detailed assessment.\n\n"
        f"Expected Text:\n{expected_text}\n\n"
        f"Student's Transcription:\n{transcription}\n\n"
        "Provide the assessment as JSON:\n"
        "{\n"
        '  "fluency_score": <number 1-10>,\n'
        '  "accuracy_analysis": "<detailed analysis of accuracy>",\n'
        '  "mistakes": ["<specific mistake>", ...],\n'
        '  "suggestions": ["<improvement suggestion>", ...],\n'
        '  "overall_feedback": "<encouraging feedback with praise and areas to improve>"\n'
        "}\n\n"
        "Be specific, constructive and encouraging. Identify pronunciation errors, "
        "omitted words, added words and reading flow issues. Write the feedback in "
        "the language of the expected text.\n\n"
        f"{JSON_ONLY}"
    )


def build_visual_aid_request(description: str, model: str | None = None) -> ProviderRequest:
    _require(description=description)
    return _text_request(
        "Generate a simple, clear educational diagram or visual aid based on this "
        f"description: {description}\n\n"
        "The image should be:\n"
        "- Simple line drawing style, suitable for copying onto a blackboard\n"
        "- Clear and easy to understand for primary school students\n"
        "- Labelled in simple words\n"
        "- Black and white or minimal colors\n\n"
        "If you cannot produce an image, describe step by step how a teacher can "
        "draw it on the blackboard.",
        model=model,
        options=VISUAL_AID_OPTIONS,
    )
