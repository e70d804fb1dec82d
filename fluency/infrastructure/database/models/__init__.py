# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for every content family.

Importing this package registers all tables on Base.metadata.
"""

from fluency.infrastructure.database.models.base import Base
from fluency.infrastructure.database.models.course import (
    Course,
    CourseBook,
    CourseOther,
    Lesson,
    LessonQuestion,
)
from fluency.infrastructure.database.models.grammar import (
    GrammarChoiceOneOption,
    GrammarChoiceOneQuestion,
    GrammarErrorIdentification,
    GrammarFillInTheBlankAnswer,
    GrammarFillInTheBlankQuestion,
    GrammarQuestion,
    GrammarSentenceTransformation,
)
from fluency.infrastructure.database.models.listening import (
    ListeningChoiceMultiOption,
    ListeningChoiceMultiQuestion,
    ListeningChoiceOneOption,
    ListeningChoiceOneQuestion,
    ListeningFillInTheBlankAnswer,
    ListeningFillInTheBlankQuestion,
    ListeningMapLabelling,
    ListeningMatching,
    ListeningQuestion,
)
from fluency.infrastructure.database.models.reading import (
    ReadingChoiceMultiOption,
    ReadingChoiceMultiQuestion,
    ReadingChoiceOneOption,
    ReadingChoiceOneQuestion,
    ReadingFillInTheBlankAnswer,
    ReadingFillInTheBlankQuestion,
    ReadingMatching,
    ReadingQuestion,
    ReadingTrueFalse,
)
from fluency.infrastructure.database.models.speaking import (
    SpeakingConversationalOpen,
    SpeakingConversationalRepetition,
    SpeakingConversationalRepetitionQA,
    SpeakingOpenParagraph,
    SpeakingParagraphRepetition,
    SpeakingPhraseRepetition,
    SpeakingQuestion,
    SpeakingWordRepetition,
)
from fluency.infrastructure.database.models.writing import (
    WritingEssay,
    WritingQuestion,
    WritingSentenceCompletion,
)

__all__ = [
    "Base",
    # Listening
    "ListeningQuestion",
    "ListeningFillInTheBlankQuestion",
    "ListeningFillInTheBlankAnswer",
    "ListeningChoiceOneQuestion",
    "ListeningChoiceOneOption",
    "ListeningChoiceMultiQuestion",
    "ListeningChoiceMultiOption",
    "ListeningMapLabelling",
    "ListeningMatching",
    # Reading
    "ReadingQuestion",
    "ReadingFillInTheBlankQuestion",
    "ReadingFillInTheBlankAnswer",
    "ReadingChoiceOneQuestion",
    "ReadingChoiceOneOption",
    "ReadingChoiceMultiQuestion",
    "ReadingChoiceMultiOption",
    "ReadingTrueFalse",
    "ReadingMatching",
    # Grammar
    "GrammarQuestion",
    "GrammarFillInTheBlankQuestion",
    "GrammarFillInTheBlankAnswer",
    "GrammarChoiceOneQuestion",
    "GrammarChoiceOneOption",
    "GrammarErrorIdentification",
    "GrammarSentenceTransformation",
    # Speaking
    "SpeakingQuestion",
    "SpeakingWordRepetition",
    "SpeakingPhraseRepetition",
    "SpeakingParagraphRepetition",
    "SpeakingOpenParagraph",
    "SpeakingConversationalRepetition",
    "SpeakingConversationalRepetitionQA",
    "SpeakingConversationalOpen",
    # Writing
    "WritingQuestion",
    "WritingSentenceCompletion",
    "WritingEssay",
    # Course
    "Course",
    "CourseBook",
    "CourseOther",
    "Lesson",
    "LessonQuestion",
]
