"""Anki 노트 생성 및 내보내기 모듈"""

from quizcard_generator.anki.export import export_anki_notes
from quizcard_generator.anki.notes import CHOICES_MAX, AnkiCloze, AnkiNote, generate_anki_notes

__all__ = ["CHOICES_MAX", "AnkiCloze", "AnkiNote", "export_anki_notes", "generate_anki_notes"]
