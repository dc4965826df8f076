"""Deterministic minimal project skeletons.

Used whenever a completion response contains no usable file blocks, so a
generation never ends with zero files. The same description and language
always produce the same files.
"""

import json

from motia_studio.models import Language, ProjectFile, normalize_language


def _one_line(description: str) -> str:
    return " ".join(description.split())


def _readme(description: str, ext: str, run: str) -> ProjectFile:
    content = f"""# Generated Motia Project

## Description
{description}

## Structure
- `src/workflow.{ext}` - Main workflow definition
- `src/steps.{ext}` - Step implementations
- `src/config.{ext}` - Configuration

## Usage
```bash
{run}
```

## API Endpoints
- POST /workflow - Execute the main workflow
"""
    return ProjectFile(path="README.md", content=content, language="markdown")


def _typescript(description: str) -> list[ProjectFile]:
    quoted = json.dumps(description)
    return [
        ProjectFile(
            path="src/workflow.ts",
            language="typescript",
            content=f"""import {{ workflow }} from 'motia';
import {{ config }} from './config';
import {{ processStep, validateStep }} from './steps';

// {description}
export const mainWorkflow = workflow({{
  name: 'main-workflow',
  description: {quoted},
  retryPolicy: config.retryPolicy,
  steps: [validateStep, processStep],
}});

export default mainWorkflow;""",
        ),
        ProjectFile(
            path="src/steps.ts",
            language="typescript",
            content="""import { Step } from 'motia';

export const validateStep: Step = {
  name: 'validate-input',
  description: 'Validate incoming data',
  async handler(context) {
    if (!context.input) {
      throw new Error('Input is required');
    }
    return context.input;
  },
};

export const processStep: Step = {
  name: 'process-data',
  description: 'Process the validated data',
  async handler(context) {
    return { success: true, data: context.input, processedAt: new Date().toISOString() };
  },
};""",
        ),
        ProjectFile(
            path="src/config.ts",
            language="typescript",
            content=f"""import {{ WorkflowConfig }} from 'motia';

export const config: WorkflowConfig = {{
  name: 'Generated Workflow',
  description: {quoted},
  retryPolicy: {{
    maxRetries: 3,
    backoffStrategy: {{ initialDelay: 1000, multiplier: 2 }},
  }},
}};

export default config;""",
        ),
        _readme(description, "ts", "npm install motia\nmotia dev"),
    ]


def _python(description: str) -> list[ProjectFile]:
    quoted = json.dumps(description)
    return [
        ProjectFile(
            path="src/workflow.py",
            language="python",
            content=f'''# {description}

from motia import workflow

from .config import CONFIG
from .steps import process_step, validate_step

main_workflow = workflow(
    name="main-workflow",
    description={quoted},
    retry_policy=CONFIG["retry_policy"],
    steps=[validate_step, process_step],
)''',
        ),
        ProjectFile(
            path="src/steps.py",
            language="python",
            content='''from datetime import datetime, timezone

from motia import step


@step(name="validate-input")
async def validate_step(context):
    if not context.input:
        raise ValueError("Input is required")
    return context.input


@step(name="process-data")
async def process_step(context):
    return {
        "success": True,
        "data": context.input,
        "processed_at": datetime.now(timezone.utc).isoformat(),
    }''',
        ),
        ProjectFile(
            path="src/config.py",
            language="python",
            content=f'''CONFIG = {{
    "name": "Generated Workflow",
    "description": {quoted},
    "retry_policy": {{
        "max_retries": 3,
        "backoff": {{"initial_delay_ms": 1000, "multiplier": 2}},
    }},
}}''',
        ),
        _readme(description, "py", "pip install motia\nmotia dev"),
    ]


def _go(description: str) -> list[ProjectFile]:
    quoted = json.dumps(description)
    return [
        ProjectFile(
            path="src/workflow.go",
            language="go",
            content=f"""// {description}
package main

import "github.com/motiadev/motia-go/motia"

func MainWorkflow() *motia.Workflow {{
	return motia.NewWorkflow(motia.WorkflowOptions{{
		Name:        "main-workflow",
		Description: {quoted},
		Retry:       Config.Retry,
		Steps:       []motia.Step{{ValidateStep, ProcessStep}},
	}})
}}

func main() {{
	motia.Run(MainWorkflow())
}}""",
        ),
        ProjectFile(
            path="src/steps.go",
            language="go",
            content="""package main

import (
	"errors"
	"time"

	"github.com/motiadev/motia-go/motia"
)

var ValidateStep = motia.Step{
	Name: "validate-input",
	Handler: func(ctx *motia.Context) (any, error) {
		if ctx.Input == nil {
			return nil, errors.New("input is required")
		}
		return ctx.Input, nil
	},
}

var ProcessStep = motia.Step{
	Name: "process-data",
	Handler: func(ctx *motia.Context) (any, error) {
		return map[string]any{
			"success":     true,
			"data":        ctx.Input,
			"processedAt": time.Now().UTC().Format(time.RFC3339),
		}, nil
	},
}""",
        ),
        ProjectFile(
            path="src/config.go",
            language="go",
            content=f"""package main

import "github.com/motiadev/motia-go/motia"

var Config = struct {{
	Name        string
	Description string
	Retry       motia.RetryPolicy
}}{{
	Name:        "Generated Workflow",
	Description: {quoted},
	Retry:       motia.RetryPolicy{{MaxRetries: 3, InitialDelayMs: 1000, Multiplier: 2}},
}}""",
        ),
        _readme(description, "go", "go mod tidy\nmotia dev"),
    ]


_BUILDERS = {
    Language.TYPESCRIPT: _typescript,
    Language.PYTHON: _python,
    Language.GO: _go,
}


def fallback_files(description: str, language: str) -> list[ProjectFile]:
    """Minimal workflow/steps/config/README skeleton for ``language``."""
    lang = normalize_language(language)
    return _BUILDERS[lang](_one_line(description))
