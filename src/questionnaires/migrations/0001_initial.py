import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import questionnaires.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Questionnaire",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("private", models.BooleanField(default=False)),
                (
                    "min_question_score",
                    models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)]),
                ),
                ("max_question_score", models.IntegerField(default=5)),
                (
                    "questionnaire_type",
                    models.CharField(
                        choices=[
                            ("ReviewQuestionnaire", "Review"),
                            ("MetareviewQuestionnaire", "Metareview"),
                            ("AuthorFeedbackQuestionnaire", "Author Feedback"),
                            ("TeammateReviewQuestionnaire", "Teammate Review"),
                            ("SurveyQuestionnaire", "Survey"),
                            ("AssignmentSurveyQuestionnaire", "Assignment Survey"),
                            ("GlobalSurveyQuestionnaire", "Global Survey"),
                            ("CourseSurveyQuestionnaire", "Course Survey"),
                            ("BookmarkRatingQuestionnaire", "Bookmark Rating"),
                            ("QuizQuestionnaire", "Quiz"),
                        ],
                        db_index=True,
                        default="ReviewQuestionnaire",
                        max_length=64,
                    ),
                ),
                ("display_type", models.CharField(blank=True, max_length=64)),
                (
                    "instruction_loc",
                    models.TextField(blank=True, default=questionnaires.models.default_instruction_loc),
                ),
                (
                    "instructor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questionnaires",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("seq", models.DecimalField(db_index=True, decimal_places=2, max_digits=6)),
                ("txt", models.TextField(blank=True, default="")),
                (
                    "question_type",
                    models.CharField(
                        choices=[
                            ("Criterion", "Criterion"),
                            ("Scale", "Scale"),
                            ("Checkbox", "Checkbox"),
                            ("Cake", "Cake"),
                            ("Dropdown", "Dropdown"),
                            ("MultipleChoiceCheckbox", "Multiple Choice Checkbox"),
                            ("MultipleChoiceRadio", "Multiple Choice Radio"),
                            ("TextArea", "Text Area"),
                            ("TextField", "Text Field"),
                            ("SectionHeader", "Section Header"),
                            ("TableHeader", "Table Header"),
                            ("ColumnHeader", "Column Header"),
                            ("UploadFile", "Upload File"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "weight",
                    models.IntegerField(
                        blank=True, null=True, validators=[django.core.validators.MinValueValidator(0)]
                    ),
                ),
                ("size", models.CharField(blank=True, max_length=32, null=True)),
                ("alternatives", models.TextField(blank=True, help_text="Choices separated by '|'.", null=True)),
                ("max_label", models.CharField(blank=True, max_length=255, null=True)),
                ("min_label", models.CharField(blank=True, max_length=255, null=True)),
                ("break_before", models.BooleanField(default=True)),
                (
                    "questionnaire",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="questionnaires.questionnaire",
                    ),
                ),
            ],
            options={
                "ordering": ["seq"],
            },
        ),
        migrations.CreateModel(
            name="QuestionAdvice",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("score", models.IntegerField()),
                ("advice", models.TextField(blank=True, default="")),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="advices",
                        to="questionnaires.question",
                    ),
                ),
            ],
            options={
                "ordering": ["score"],
            },
        ),
        migrations.CreateModel(
            name="Answer",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("answer", models.IntegerField(blank=True, null=True)),
                ("comments", models.TextField(blank=True, default="")),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="answers",
                        to="questionnaires.question",
                    ),
                ),
                (
                    "reviewer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="answers",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
    ]
