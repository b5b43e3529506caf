"""System prompts and generation parameters for the AI routes."""

from dataclasses import dataclass

from src.autobuilder.schemas.ai import CodeLanguage, CodeType


@dataclass(frozen=True)
class CompletionParams:
    max_tokens: int
    temperature: float


GENERATE_PARAMS = CompletionParams(max_tokens=2000, temperature=0.7)
REVIEW_PARAMS = CompletionParams(max_tokens=1500, temperature=0.3)
OPTIMIZE_PARAMS = CompletionParams(max_tokens=2000, temperature=0.3)
CHAT_PARAMS = CompletionParams(max_tokens=1000, temperature=0.7)

GENERATE_PROMPTS: dict[CodeType, str] = {
    CodeType.COMPONENT: (
        "You are a React/TypeScript expert. Generate a modern, well-structured React "
        "component using TypeScript, Tailwind CSS, and best practices. Include proper "
        "types, error handling, and accessibility."
    ),
    CodeType.CONTRACT: (
        "You are a MultiversX smart contract expert. Generate a Rust smart contract "
        "using the MultiversX framework. Include proper error handling, events, and "
        "security best practices."
    ),
    CodeType.API: (
        "You are a Node.js/Express expert. Generate a RESTful API endpoint using "
        "TypeScript, Express, and Prisma ORM. Include proper validation, error "
        "handling, and documentation."
    ),
    CodeType.TEST: (
        "You are a testing expert. Generate comprehensive unit tests using Jest and "
        "Testing Library. Include edge cases, mocks, and proper assertions."
    ),
}

CHAT_PROMPT = """You are a helpful assistant for the BlockchainAI AutoBuilder platform. \
You help developers with:
- Next.js and React development
- TypeScript programming
- MultiversX blockchain integration
- Smart contract development
- Web3 technologies
- DevOps and CI/CD

Provide accurate, helpful, and concise responses."""


def generate_prompt(code_type: CodeType, framework: str) -> str:
    prompt = GENERATE_PROMPTS[code_type]
    if code_type is CodeType.COMPONENT and framework.lower() != "react":
        prompt += f" Target the {framework} framework instead of plain React."
    return prompt


def review_prompt(language: CodeLanguage) -> str:
    return f"""You are a senior code reviewer. Analyze the provided {language.value} code \
and provide:
1. Security issues and vulnerabilities
2. Performance optimizations
3. Code quality improvements
4. Best practices violations
5. Bug fixes
6. Overall rating (1-10)

Be specific and provide actionable feedback with examples."""


def optimize_prompt(language: CodeLanguage, goals: list[str]) -> str:
    return f"""You are a code optimization expert. Optimize the provided {language.value} \
code focusing on: {", ".join(goals)}.

Provide:
1. Optimized code
2. Explanation of changes
3. Performance improvements
4. Maintainability improvements

Maintain the original functionality while improving the specified aspects."""


def fenced(code: str, language: CodeLanguage) -> str:
    return f"```{language.value}\n{code}\n```"


def review_message(code: str, language: CodeLanguage, context: str) -> str:
    return f"Context: {context}\n\nCode to review:\n{fenced(code, language)}"
