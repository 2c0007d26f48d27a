"""intake_server — FastAPI REST API for the patient-intake workflow.

Exposes case management, questionnaire and vitals capture, AI clinical
notes, and the symptom-pathway evaluator over HTTP.
"""
