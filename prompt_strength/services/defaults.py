"""
DEFAULT RUBRIC - Levers and model profiles seeded into an empty rubric store
"""

DEFAULT_LEVERS = [
    {
        "id": "prompt-length",
        "name": "Prompt Length",
        "description": "Checks for sufficient detail in the prompt",
        "weight": 15,
        "enabled": True,
        "thresholds": {"min": 50, "max": 4000, "optimal": {"min": 100, "max": 2000}},
        "feedback": {
            "missing": "Your prompt is too short. Add more context and details.",
            "weak": "Your prompt could use more detail to get better results.",
            "good": "Good prompt length with adequate detail.",
        },
        "priority": 1,
    },
    {
        "id": "context-inclusion",
        "name": "Context Inclusion",
        "description": "Detects background information and context markers",
        "weight": 20,
        "enabled": True,
        "patterns": ["context:", "background:", "situation:", "for context", "currently", "we have",
                     "our", "my project", "my application", "i'm working on",
                     "i'm building", "i am building", "the situation is"],
        "feedback": {
            "missing": "Add context about your situation or project to get more relevant responses.",
            "weak": "Consider adding more background information for better results.",
            "good": "Good context provided!",
        },
        "priority": 2,
    },
    {
        "id": "persona-specification",
        "name": "Persona Specification",
        "description": "Checks for role or persona assignment",
        "weight": 15,
        "enabled": True,
        "patterns": ["act as", "you are", "you're a", "as a", "imagine you're", "expert in",
                     "specialist", "senior", "experienced"],
        "feedback": {
            "missing": "Consider assigning a persona or role (e.g., 'Act as a senior developer...').",
            "weak": "Your persona could be more specific to the task.",
            "good": "Good persona specification!",
        },
        "priority": 3,
    },
    {
        "id": "task-clarity",
        "name": "Task Clarity",
        "description": "Evaluates clear task definition and action words",
        "weight": 20,
        "enabled": True,
        "patterns": ["create", "write", "generate", "explain", "analyze", "summarize", "compare",
                     "review", "help me", "build", "implement", "design", "fix", "debug"],
        "feedback": {
            "missing": "Clearly state what you want the AI to do (e.g., 'Write...', 'Explain...', 'Create...').",
            "weak": "Be more specific about the task you want completed.",
            "good": "Clear task definition!",
        },
        "priority": 1,
    },
    {
        "id": "examples-presence",
        "name": "Examples Presence",
        "description": "Detects example patterns for better understanding",
        "weight": 10,
        "enabled": True,
        "patterns": ["for example", "such as", "like this", "example:", "sample:", "similar to",
                     "for instance", "e.g."],
        "feedback": {
            "missing": "Adding examples can significantly improve response quality.",
            "weak": "Consider adding more examples to clarify your expectations.",
            "good": "Great use of examples!",
        },
        "priority": 4,
    },
    {
        "id": "format-specification",
        "name": "Format Specification",
        "description": "Checks for output format requests",
        "weight": 10,
        "enabled": True,
        "patterns": ["format:", "in json", "as a list", "bullet points", "numbered list", "markdown",
                     "table format", "step by step", "output as"],
        "feedback": {
            "missing": "Specify your desired output format (e.g., list, JSON, markdown).",
            "weak": "Be more specific about the format you want.",
            "good": "Good format specification!",
        },
        "priority": 5,
    },
    {
        "id": "constraints-defined",
        "name": "Constraints Defined",
        "description": "Detects limits and boundaries in the prompt",
        "weight": 10,
        "enabled": True,
        "patterns": ["must", "should", "don't", "do not", "avoid", "limit", "maximum", "minimum",
                     "only", "at least", "at most", "ensure", "without"],
        "feedback": {
            "missing": "Define constraints or boundaries for more focused results.",
            "weak": "Consider adding more specific constraints.",
            "good": "Good constraints defined!",
        },
        "priority": 6,
    },
]

DEFAULT_MODELS = [
    {
        "id": "claude",
        "name": "Claude",
        "provider": "Anthropic",
        "provider_id": "anthropic",
        "description": "Anthropic's Claude models",
        "enabled": True,
        "lever_weights": {"prompt-length": 15, "context-inclusion": 25, "persona-specification": 15,
                          "task-clarity": 20, "examples-presence": 10, "format-specification": 5,
                          "constraints-defined": 10},
        "best_practices": [
            "Use XML tags to structure your prompt (e.g., <context>, <task>, <constraints>)",
            "Claude responds well to explicit role assignments with 'You are...'",
            "Be explicit about what you want Claude to avoid or include",
        ],
        "preferred_structure": ["Context/Background", "Task Definition", "Constraints/Requirements", "Output Format"],
    },
    {
        "id": "gpt4",
        "name": "GPT-4",
        "provider": "OpenAI",
        "provider_id": "openai",
        "description": "OpenAI's GPT-4",
        "enabled": True,
        "lever_weights": {"prompt-length": 15, "context-inclusion": 20, "persona-specification": 20,
                          "task-clarity": 20, "examples-presence": 10, "format-specification": 10,
                          "constraints-defined": 5},
        "best_practices": [
            "GPT-4 excels when you specify numeric constraints (length, count, etc.)",
            "Request JSON output for structured data",
            "Use clear section headers with markdown formatting",
        ],
        "preferred_structure": ["System Context", "Background Information", "Specific Task", "Format Requirements"],
    },
    {
        "id": "gemini",
        "name": "Gemini",
        "provider": "Google",
        "provider_id": "google",
        "description": "Google's Gemini",
        "enabled": True,
        "lever_weights": {"prompt-length": 15, "context-inclusion": 20, "persona-specification": 10,
                          "task-clarity": 25, "examples-presence": 15, "format-specification": 10,
                          "constraints-defined": 5},
        "best_practices": [
            "Gemini excels at multi-step reasoning - break complex tasks into steps",
            "Gemini responds well to examples with clear input/output pairs",
        ],
        "preferred_structure": ["Clear Task Statement", "Step-by-Step Instructions", "Examples", "Output Format"],
    },
    {
        "id": "llama3",
        "name": "Llama 3",
        "provider": "Meta",
        "provider_id": "meta",
        "description": "Meta's Llama 3",
        "enabled": True,
        "lever_weights": {"prompt-length": 20, "context-inclusion": 20, "persona-specification": 15,
                          "task-clarity": 25, "examples-presence": 10, "format-specification": 5,
                          "constraints-defined": 5},
        "best_practices": [
            "Llama 3 benefits from explicit, direct instructions without ambiguity",
            "Keep context concise - Llama 3 performs best with focused prompts",
        ],
        "preferred_structure": ["Direct Task Statement", "Specific Requirements", "Concise Context", "Expected Output"],
    },
    {
        "id": "mistral",
        "name": "Mistral",
        "provider": "Mistral AI",
        "provider_id": "mistral",
        "description": "Mistral AI models",
        "enabled": True,
        "lever_weights": {"prompt-length": 15, "context-inclusion": 15, "persona-specification": 15,
                          "task-clarity": 25, "examples-presence": 15, "format-specification": 10,
                          "constraints-defined": 5},
        "best_practices": [
            "Mistral excels with clear, well-structured instructions",
            "Use few-shot examples to establish the pattern you want",
        ],
        "preferred_structure": ["Task Definition", "Few-Shot Examples", "Specific Requirements", "Output Format"],
    },
]
