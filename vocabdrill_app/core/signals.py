"""
Central Signal Registry.

Uses blinker (Flask's signal backend) so the study loop can announce events
without knowing who listens.

Usage:
    # Publisher
    from vocabdrill_app.core.signals import word_completed
    word_completed.send(None, user_id=1, word_id=2, kind='new')

    # Subscriber
    @word_completed.connect
    def on_word_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

study_signals = Namespace()

# Fired when a word reaches temp_step 2 in a session.
# Payload: user_id, word_id, semester_id, kind ('new' | 'review')
word_completed = study_signals.signal('word_completed')

# Fired when a correct answer triggers the pronunciation side-effect.
# Payload: user_id, word_id, word, url
word_pronounced = study_signals.signal('word_pronounced')

# Fired when a study session ends (finished or exited).
# Payload: user_id, kind, total_words, completed_words, finished
session_completed = study_signals.signal('session_completed')

content_signals = Namespace()

# Fired after an import of words into a semester.
# Payload: user_id, semester_id, imported
words_imported = content_signals.signal('words_imported')
