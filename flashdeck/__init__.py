"""Flashdeck: ownership-scoped flashcard decks with a study mode."""
