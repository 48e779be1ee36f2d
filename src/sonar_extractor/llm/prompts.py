import yaml
from datetime import date
from pathlib import Path
from string import Template
from typing import List, Dict, Optional
from ..config import get_settings

SYSTEM_PROMPT = "extract_claims_system"
USER_PROMPT = "extract_claims_user"

def load_prompt(name: str) -> str:
    prompts_dir = Path(get_settings().PROMPTS_DIR)
    # Prioritize .yaml for structured prompts
    yaml_path = prompts_dir / f"{name}.yaml"
    if yaml_path.exists():
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data.get("content", "")
            
    # Fallback to .md
    md_path = prompts_dir / f"{name}.md"
    if md_path.exists():
        with open(md_path, "r", encoding="utf-8") as f:
            return f.read()
            
    raise FileNotFoundError(f"Prompt {name} not found as .yaml or .md in {prompts_dir}")

def build_user_prompt(query: str, today: Optional[date] = None) -> str:
    # $-placeholders because the template body is full of JSON braces
    template = Template(load_prompt(USER_PROMPT))
    return template.safe_substitute(
        topic=query.strip(),
        today=(today or date.today()).isoformat(),
    )

def build_messages(query: str, today: Optional[date] = None) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": load_prompt(SYSTEM_PROMPT)},
        {"role": "user", "content": build_user_prompt(query, today)},
    ]
