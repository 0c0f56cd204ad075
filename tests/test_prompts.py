"""Tests for prompt construction and form validation."""
from diva.models.document import DocumentType
from diva.models.schemas import DocInput, QuestionnaireAnswers
from diva.services.prompts import (
    build_setup_steps,
    build_tools_table,
    generate_doc_prompt,
    generate_dev_setup_prompt,
    generate_user_guide_prompt,
    validate_doc_input,
    wants_mobile,
)


def _form(**overrides) -> DocInput:
    fields = {
        "app_name": "Inventory Tracker",
        "description": "Tracks stock levels.",
        "backend_tech": "Spring Boot",
        "database": "MySQL",
    }
    fields.update(overrides)
    return DocInput(**fields)


def test_validate_doc_input():
    assert validate_doc_input(_form()) == []
    assert validate_doc_input(_form(app_name=" ", description=None)) == [
        "Application Name is required",
        "Project Description is required",
    ]


def test_form_accepts_camel_case_keys():
    data = DocInput.model_validate({
        "appName": "X",
        "frontendMobileTech": "Flutter",
        "documentType": "user-guide",
        "questionnaire": {"isContainerized": True},
    })
    assert data.app_name == "X"
    assert data.frontend_mobile_tech == "Flutter"
    assert data.document_type is DocumentType.USER_GUIDE
    assert data.questionnaire.is_containerized


def test_to_metadata():
    metadata = _form(company_name="Acme", developers="Ana\n\nBen", project_manager="Dr. Lim").to_metadata()
    assert metadata.application_name == "Inventory Tracker"
    assert metadata.institution_name == "Acme"
    assert metadata.developers == ("Ana", "Ben")
    assert metadata.supervisor_name == "Dr. Lim"
    assert metadata.document_type is DocumentType.DEV_SETUP


def test_tools_table_rows():
    table = build_tools_table(_form())
    lines = table.splitlines()
    assert lines[0] == "Category | Tool/Technology"
    assert "Backend | Spring Boot" in lines
    assert "Database | MySQL" in lines
    assert "Version Control | Git" in lines
    assert not any(line.startswith("Frontend (Mobile)") for line in lines)
    assert not any(line.startswith("Containerization") for line in lines)


def test_tools_table_follows_questionnaire():
    form = _form(questionnaire=QuestionnaireAnswers(
        include_mobile_frontend=True, is_containerized=True, include_api_testing=True,
    ))
    lines = build_tools_table(form).splitlines()
    assert "Frontend (Mobile) | To be determined" in lines
    assert "Containerization | Docker" in lines
    assert "Testing Tool | Postman" in lines


def test_mobile_enabled_by_field():
    assert wants_mobile(_form(frontend_mobile_tech="React Native"))
    assert not wants_mobile(_form(frontend_mobile_tech="  "))


def test_setup_steps_use_custom_instructions():
    steps = build_setup_steps(_form(github_instructions="Fork the repo first."))
    assert "#### 🟣 ***GitHub Repository Setup***\nFork the repo first." in steps
    assert "#### 🔵 ***Database Configuration***" in steps
    assert "CREATE DATABASE inventory_tracker_db;" in steps
    assert "🟡" not in steps


def test_setup_steps_backend_commands():
    assert "./mvnw spring-boot:run" in build_setup_steps(_form())
    assert "npm run migrate" in build_setup_steps(_form(backend_tech="Node.js"))
    assert "python manage.py runserver" in build_setup_steps(_form(backend_tech="Django"))


def test_setup_steps_external_apis():
    steps = build_setup_steps(_form(ai_integration="OpenAI"))
    assert "#### 🟡 ***External APIs Configuration***" in steps
    assert "OpenAI platform" in steps


def test_dev_setup_prompt():
    prompt = generate_dev_setup_prompt(_form())
    assert "Developer Setup Guide" in prompt
    assert "Application Name: Inventory Tracker" in prompt
    assert "Institution/Company: Professional Organization" in prompt
    assert "### 4 STEP-BY-STEP SETUP GUIDE" in prompt


def test_user_guide_prompt_mobile_sections():
    without = generate_user_guide_prompt(_form())
    assert "Mobile Application Features" not in without

    with_mobile = generate_user_guide_prompt(_form(frontend_mobile_tech="Flutter"))
    assert "Mobile Application Features" in with_mobile
    assert "### 3.2 HOW TO USE THE MOBILE APPLICATION" in with_mobile


def test_generate_doc_prompt_dispatches_on_type():
    assert generate_doc_prompt(_form()) == generate_dev_setup_prompt(_form())
    user = _form(document_type=DocumentType.USER_GUIDE)
    assert generate_doc_prompt(user) == generate_user_guide_prompt(user)
