from django.urls import path
from . import views

urlpatterns = [
    # Scan-to-Score
    path("scanner/evaluate/", views.evaluate_answer, name="evaluate_answer"),

    # Video-to-Notes
    path("video-notes/", views.generate_video_notes, name="generate_video_notes"),

    # Tutor
    path("tutor/", views.ask_tutor, name="ask_tutor"),

    # Question bank
    path("questions/", views.list_questions, name="list_questions"),
    path("questions/subjects/", views.list_subjects, name="list_subjects"),
    path("questions/solution/", views.model_solution, name="model_solution"),
    path(
        "questions/<int:question_id>/solution/",
        views.question_model_solution,
        name="question_model_solution",
    ),

    # Study vault
    path("vault/documents/", views.vault_documents, name="vault_documents"),
    path(
        "vault/documents/<uuid:document_id>/",
        views.delete_vault_document,
        name="delete_vault_document",
    ),
    path("vault/context/", views.vault_context, name="vault_context"),
]
