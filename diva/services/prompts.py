"""
Prompt construction for guide generation.

The prompt fixes the document structure the transcoder recognizes: numbered
``1 OVERVIEW`` sections, ``Category | Tool/Technology`` tables, ``➢``
prerequisite bullets, colored marker headings for setup steps and emoji-led
feature lines.  All templates are module-level constants so wording can be
tuned without touching the assembly logic.

Public API
----------
validate_doc_input(data)         -> List[str]
generate_dev_setup_prompt(data)  -> str
generate_user_guide_prompt(data) -> str
generate_doc_prompt(data)        -> str
"""
from __future__ import annotations

from typing import List, Optional

from diva.models.document import DocumentType
from diva.models.schemas import DocInput
from diva.utils.helpers import slugify

FENCE = "```"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_PROJECT_INFO = """\
## PROJECT INFORMATION:
Application Name: {app_name}
Institution/Company: {company}
Description: {description}
Development Team: {developers}
Project Manager: {project_manager}
"""

_DEV_SETUP_PROMPT = """\
You are an expert technical documentation specialist with 10+ years of experience. \
Create a comprehensive, professional Developer Setup Guide that meets enterprise standards.

## INPUT ANALYSIS & ENHANCEMENT INSTRUCTIONS:
Even if the user provides minimal information, you MUST expand it into detailed, professional content. Use your expertise to:
- Infer standard prerequisites for the mentioned technologies
- Add comprehensive setup steps based on the tech stack
- Include industry best practices and common configurations
- Add appropriate emojis as specified in the formatting requirements

{project_info}
## DOCUMENT STRUCTURE REQUIREMENTS:

### 1 OVERVIEW
Write a comprehensive 250-300 word overview that includes:
- Professional welcome statement for developers
- Detailed explanation of the application's purpose and scope
- Technical architecture overview
- What developers will accomplish by following this guide

### 2 TOOLS & TECHNOLOGIES
Create a comprehensive technology breakdown. Based on the tech stack provided, intelligently categorize and expand:

REQUIRED FORMAT (expand based on technologies mentioned):
{tools_table}

### 3 PREREQUISITES
Based on the technology stack, provide comprehensive prerequisites. For each tool, include:
- Exact version requirements
- Professional explanation of why it's needed

EXAMPLE FORMAT:
➢ **Node.js v18+ (LTS)** *Required for running the React frontend and build tools.*

➢ **Java 17+ (JDK)** *Enterprise-grade Java Development Kit required for Spring Boot backend development.*

[Continue with ALL relevant prerequisites based on tech stack]

### 4 STEP-BY-STEP SETUP GUIDE

{setup_steps}

## FORMATTING REQUIREMENTS:
- Use the following emojis for section headers:
  - 🟣 (purple circle) for GitHub setup
  - 🔵 (blue circle) for database configuration
  - 🟡 (yellow circle) for external APIs
  - ▶️ (play button) for running instructions
- Use bold (**text**) for tool names in prerequisites
- Use italic (*text*) for descriptions in prerequisites
- Include specific commands in code blocks
- Use professional, technical language throughout

Generate a professional, comprehensive Developer Setup Guide that meets enterprise standards.
"""

_USER_GUIDE_PROMPT = """\
You are an expert technical writer specializing in user-friendly documentation for professional \
and academic environments. Create a comprehensive User Guide that meets professional submission standards.

## INPUT ANALYSIS & ENHANCEMENT INSTRUCTIONS:
Transform any minimal input into detailed, professional content suitable for end-users. Use your expertise to:
- Expand brief descriptions into comprehensive user workflows
- Provide step-by-step instructions with clear outcomes
- Add appropriate emojis as specified in the formatting requirements

{project_info}
## DOCUMENT STRUCTURE REQUIREMENTS:

### 1 INTRODUCTION
Write a comprehensive 300-350 word introduction that includes:
- Professional welcome to users
- Detailed explanation of the application's purpose and value
- Target audience identification and benefits

### 2 GENERAL INFORMATION
Provide detailed application information (250-300 words):
- Comprehensive application functionality description
- Key benefits and value propositions

### 2.1 SYSTEM OVERVIEW
Detail comprehensive functionality organized by platform:

**Web Application Features:**
Provide 8-12 detailed features with professional descriptions:
🌟 User Dashboard – Comprehensive personal interface for activity management
🔧 Administrative Interface – Centralized management system for user oversight
💬 Communication System – Integrated messaging platform with real-time notifications
🤖 AI-Powered Support – Intelligent assistance system with automated responses
👤 Profile Management – Complete user account control with security settings
🔔 Real-Time Notifications – Instant alert system for critical updates
📊 Analytics & Reporting – Comprehensive data visualization and tracking
📚 Help & Documentation – Integrated support center with searchable knowledge base
{mobile_features}
### 3 GETTING STARTED
Provide comprehensive access instructions:

**Web Application Access**
- Professional URL and access requirements
- Browser compatibility and system requirements
- Initial setup and account creation process
{mobile_access}
### 3.1 HOW TO USE THE WEB APPLICATION
Create detailed step-by-step instructions (12-15 steps) covering:
🚀 Initial access and navigation overview
👤 Account creation and verification process
⚙️ Profile setup and customization
📊 Dashboard orientation and feature overview
🔍 Core functionality utilization
💬 Communication and collaboration features
🛠️ Troubleshooting common issues
💡 Best practices and optimization tips
{mobile_usage}
## FORMATTING REQUIREMENTS:
- Use colorful emojis at the beginning of each feature or instruction step
- Use bold (**text**) for important terms and features
- Use italic (*text*) for explanatory notes and tips
- Include specific steps with expected outcomes

Generate a professional, comprehensive User Guide that meets enterprise and academic submission \
standards while remaining user-friendly and accessible.
"""

_MOBILE_FEATURES = """
**Mobile Application Features:**
Provide 6-8 mobile-specific features:
📱 Mobile-Optimized Interface – Touch-friendly design with responsive layouts
🔔 Push Notifications – Real-time mobile alerts with customizable preferences
🔄 Offline Capabilities – Essential functionality available without connectivity
📲 Mobile-Specific Workflows – Streamlined processes optimized for mobile interaction
📷 Camera Integration – Built-in photo capture and document scanning
📍 Location Services – GPS-enabled features for location-based functionality
"""

_MOBILE_ACCESS = """
**Mobile Application Installation**
- Detailed installation instructions for all platforms
- System requirements and compatibility information
- Initial configuration and setup process
"""

_MOBILE_USAGE = """
### 3.2 HOW TO USE THE MOBILE APPLICATION
Create comprehensive mobile instructions (10-12 steps) covering:
📲 Application download and installation
🔄 Initial setup and account synchronization
👆 Mobile interface navigation and gestures
📱 Core mobile features and workflows
🔔 Notification management and preferences
🔋 Performance optimization and battery management
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _value(text: Optional[str], default: str = "") -> str:
    """Stripped field value, or *default* when blank."""
    return (text or "").strip() or default


def _code(*lines: str) -> str:
    return "\n".join((FENCE,) + lines + (FENCE,))


def _stack_flavor(tech: Optional[str]) -> Optional[str]:
    """Classify a backend/mobile stack name for default commands."""
    lowered = (tech or "").lower()
    if "node" in lowered or "javascript" in lowered:
        return "node"
    if "java" in lowered or "spring" in lowered:
        return "java"
    if "python" in lowered or "django" in lowered:
        return "python"
    return None


_BACKEND_COMMANDS = {
    "node": ("npm install", "npm run migrate", "npm run dev"),
    "java": ("./mvnw clean install", "./mvnw flyway:migrate", "./mvnw spring-boot:run"),
    "python": ("pip install -r requirements.txt", "python manage.py migrate", "python manage.py runserver"),
}

_GENERIC_BACKEND_COMMANDS = (
    "# Install dependencies using the appropriate package manager",
    "# Run migrations using the appropriate command",
    "# Start the server using the appropriate command",
)


def _section(marker: str, title: str, body: str) -> str:
    return f"#### {marker} ***{title}***\n{body.strip()}\n"


# ---------------------------------------------------------------------------
# Default setup steps (used when the form leaves an instruction blank)
# ---------------------------------------------------------------------------

def _default_github_steps(data: DocInput) -> str:
    repo = slugify(_value(data.app_name, "app"))
    return "\n\n".join([
        "1. Clone the repository using Git:\n"
        + _code(f"git clone https://github.com/organization/{repo}.git", f"cd {repo}"),
        "2. Switch to the development branch:\n" + _code("git checkout develop"),
        "3. Configure your Git user information:\n"
        + _code('git config user.name "Your Name"', 'git config user.email "your.email@example.com"'),
    ])


def _default_database_steps(data: DocInput) -> str:
    name = slugify(_value(data.app_name, "app"), "_")
    database = _value(data.database, "the database")
    return "\n\n".join([
        f"1. Install {database} on your local machine:\n"
        "   - Download from the official website\n"
        "   - Follow the installation wizard\n"
        "   - Set up a secure password",
        "2. Create a new database for the project:\n" + _code(f"CREATE DATABASE {name}_db;"),
        "3. Create a database user with appropriate permissions:\n"
        + _code(
            f"CREATE USER '{name}_user'@'localhost' IDENTIFIED BY 'secure_password';",
            f"GRANT ALL PRIVILEGES ON {name}_db.* TO '{name}_user'@'localhost';",
            "FLUSH PRIVILEGES;",
        ),
        "4. Configure the database connection in the application:\n"
        "   - Locate the configuration file in the project\n"
        "   - Update the connection string with your credentials",
    ])


def _default_external_api_steps(provider: str) -> str:
    return "\n\n".join([
        f"1. Sign up for an account on the {provider} platform and verify your email address.",
        "2. Create a new API key from the developer dashboard and store it securely.",
        "3. Configure the API key in the application:\n"
        + _code(
            "# Add to your .env file (do not commit this file)",
            "AI_API_KEY=your_api_key_here",
            "AI_API_ENDPOINT=https://api.example.com/v1",
        ),
    ])


def _default_backend_steps(data: DocInput) -> str:
    install, migrate, start = _BACKEND_COMMANDS.get(
        _stack_flavor(data.backend_tech), _GENERIC_BACKEND_COMMANDS
    )
    return "\n\n".join([
        "1. Navigate to the backend directory:\n" + _code("cd backend"),
        "2. Install dependencies:\n" + _code(install),
        "3. Set up environment variables:\n"
        + _code("cp .env.example .env", "# Edit .env file with your local configuration"),
        "4. Run database migrations:\n" + _code(migrate),
        "5. Start the development server:\n" + _code(start),
        "6. Verify the backend is running:\n"
        "   - Open your browser and navigate to http://localhost:8080/api/health",
    ])


def _default_frontend_web_steps() -> str:
    return "\n\n".join([
        "1. Navigate to the frontend directory:\n" + _code("cd frontend"),
        "2. Install dependencies:\n" + _code("npm install"),
        "3. Set up environment variables:\n"
        + _code("cp .env.example .env.local", "# Edit .env.local with your local configuration"),
        "4. Start the development server:\n" + _code("npm run dev"),
        "5. Access the application:\n"
        "   - Open your browser and navigate to http://localhost:3000",
    ])


def _default_mobile_steps(data: DocInput) -> str:
    lowered = (data.frontend_mobile_tech or "").lower()
    if "react native" in lowered:
        start = _code("npx react-native start")
        run = _code("# For iOS", "npx react-native run-ios", "# For Android", "npx react-native run-android")
    elif "flutter" in lowered:
        start = _code("flutter run")
        run = _code("# For iOS", "flutter run -d ios", "# For Android", "flutter run -d android")
    else:
        start = _code("# Start the mobile development server")
        run = _code("# Run on your preferred device or emulator")
    return "\n\n".join([
        "1. Navigate to the mobile directory:\n" + _code("cd mobile"),
        "2. Install dependencies:\n" + _code("npm install"),
        "3. Start the development server:\n" + start,
        "4. Run on a device or emulator:\n" + run,
    ])


def _default_api_testing_steps(tool: str) -> str:
    return "\n\n".join([
        f"1. Install {tool} from the official website and launch the application.",
        f"2. Import the API collection from the project repository into {tool}.",
        f"3. Create a new environment in {tool} with BASE_URL set to http://localhost:8080/api",
        "4. Authenticate with the API and save the returned token to AUTH_TOKEN.",
        "5. Test each endpoint and verify that responses match the expected format.",
    ])


# ---------------------------------------------------------------------------
# Section gating
# ---------------------------------------------------------------------------

def wants_mobile(data: DocInput) -> bool:
    return data.questionnaire.include_mobile_frontend or bool(_value(data.frontend_mobile_tech))


def wants_containerization(data: DocInput) -> bool:
    return data.questionnaire.is_containerized or bool(_value(data.containerization_tool))


def wants_api_testing(data: DocInput) -> bool:
    return (
        data.questionnaire.include_api_testing
        or bool(_value(data.testing_tool))
        or bool(_value(data.api_testing_instructions))
    )


def wants_external_apis(data: DocInput) -> bool:
    return (
        data.questionnaire.consumes_external_apis
        or bool(_value(data.ai_integration))
        or bool(_value(data.external_api_instructions))
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_doc_input(data: DocInput) -> List[str]:
    """Return human-readable messages for every missing required field."""
    errors: List[str] = []
    if not _value(data.app_name):
        errors.append("Application Name is required")
    if not _value(data.description):
        errors.append("Project Description is required")
    return errors


def _project_info(data: DocInput, default_description: str) -> str:
    return _PROJECT_INFO.format(
        app_name=_value(data.app_name),
        company=_value(data.company_name, "Professional Organization"),
        description=_value(data.description, default_description),
        developers=_value(data.developers, "Development Team"),
        project_manager=_value(data.project_manager, "Project Supervisor"),
    )


def build_tools_table(data: DocInput) -> str:
    """``Category | Tool/Technology`` rows for the tech stack."""
    rows = [
        ("Backend", _value(data.backend_tech, "Not specified")),
        ("Frontend (Web)", _value(data.frontend_web_tech, "Not specified")),
    ]
    if wants_mobile(data):
        rows.append(("Frontend (Mobile)", _value(data.frontend_mobile_tech, "To be determined")))
    rows.extend([
        ("Database", _value(data.database, "Not specified")),
        ("Build Tool", _value(data.build_tool, "Not specified")),
        ("Version Control", _value(data.version_control, "Git")),
    ])
    if wants_containerization(data):
        rows.append(("Containerization", _value(data.containerization_tool, "Docker")))
    if _value(data.ai_integration):
        rows.append(("AI Integration", _value(data.ai_integration)))
    if wants_api_testing(data):
        rows.append(("Testing Tool", _value(data.testing_tool, "Postman")))
    rows.append(("IDE", _value(data.ide, "Not specified")))

    lines = ["Category | Tool/Technology"]
    lines.extend(f"{category} | {tool}" for category, tool in rows)
    return "\n".join(lines)


def build_setup_steps(data: DocInput) -> str:
    """Section 4 of the developer guide, one marker heading per step group."""
    sections = [
        _section("🟣", "GitHub Repository Setup", _value(data.github_instructions) or _default_github_steps(data)),
        _section("🔵", "Database Configuration", _value(data.database_instructions) or _default_database_steps(data)),
    ]
    if wants_external_apis(data):
        body = _value(data.external_api_instructions) or _default_external_api_steps(
            _value(data.ai_integration, "external API")
        )
        sections.append(_section("🟡", "External APIs Configuration", body))

    sections.append(_section("▶️", "Running the Backend", _value(data.backend_instructions) or _default_backend_steps(data)))
    sections.append(_section(
        "▶️", "Running the Frontend (Web)",
        _value(data.frontend_web_instructions) or _default_frontend_web_steps(),
    ))
    if wants_mobile(data):
        sections.append(_section(
            "▶️", "Running the Frontend (Mobile)",
            _value(data.frontend_mobile_instructions) or _default_mobile_steps(data),
        ))
    if wants_api_testing(data):
        sections.append(_section(
            "▶️", "API Testing",
            _value(data.api_testing_instructions) or _default_api_testing_steps(_value(data.testing_tool, "Postman")),
        ))
    return "\n".join(sections)


def generate_dev_setup_prompt(data: DocInput) -> str:
    return _DEV_SETUP_PROMPT.format(
        project_info=_project_info(data, "Advanced software application"),
        tools_table=build_tools_table(data),
        setup_steps=build_setup_steps(data),
    )


def generate_user_guide_prompt(data: DocInput) -> str:
    mobile = wants_mobile(data)
    return _USER_GUIDE_PROMPT.format(
        project_info=_project_info(data, "Professional software application"),
        mobile_features=_MOBILE_FEATURES if mobile else "",
        mobile_access=_MOBILE_ACCESS if mobile else "",
        mobile_usage=_MOBILE_USAGE if mobile else "",
    )


def generate_doc_prompt(data: DocInput) -> str:
    """Pick the template for ``data.document_type``."""
    if data.document_type is DocumentType.DEV_SETUP:
        return generate_dev_setup_prompt(data)
    return generate_user_guide_prompt(data)
