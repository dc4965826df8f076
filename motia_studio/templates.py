"""Seed catalog of project templates."""

import structlog

from .models import Difficulty, ProjectFile, Template
from .store import RecordStore

logger = structlog.get_logger(__name__)

TEMPLATE_CATALOG: tuple[Template, ...] = (
    Template(
        id="rest-api-crud",
        name="REST API with CRUD",
        description=(
            "Full-featured REST API with database operations, validation, "
            "error handling, and authentication"
        ),
        category="API",
        difficulty=Difficulty.BEGINNER,
        deploy_time="10s",
        features=["CRUD Operations", "Input Validation", "Error Handling", "JWT Auth"],
        files=[
            ProjectFile(
                path="src/api/items.ts",
                language="typescript",
                content="""import { Step } from 'motia';
import { z } from 'zod';

const ItemSchema = z.object({
  name: z.string().min(1).max(100),
  price: z.number().positive(),
});

export const createItem = Step({
  name: 'create-item',
  async handler(request) {
    const data = ItemSchema.parse(request.body);
    return { success: true, data: await db.item.create({ data }) };
  },
});

export const getItems = Step({
  name: 'get-items',
  async handler() {
    return { success: true, data: await db.item.findMany() };
  },
});""",
            ),
            ProjectFile(
                path="src/workflow.ts",
                language="typescript",
                content="""import { workflow } from 'motia';
import { createItem, getItems } from './api/items';

export const crudWorkflow = workflow({ name: 'crud-api', steps: [createItem, getItems] });""",
            ),
        ],
    ),
    Template(
        id="ai-agent-workflow",
        name="AI Agent Workflow",
        description="Multi-step AI agent that fetches data, analyzes it with an LLM and acts on it",
        category="AI",
        difficulty=Difficulty.INTERMEDIATE,
        deploy_time="12s",
        features=["LLM Integration", "Multi-step Workflow", "Action Extraction", "Notifications"],
        files=[
            ProjectFile(
                path="src/workflows/ai-analysis.ts",
                language="typescript",
                content="""import { workflow, Step } from 'motia';

export const analyzeWithAI = Step({
  name: 'analyze-with-ai',
  async handler({ document }) {
    const summary = await llm.complete(`Summarize: ${document.text}`);
    return { summary };
  },
});

export const aiAnalysisWorkflow = workflow({
  name: 'ai-analysis-workflow',
  steps: [analyzeWithAI],
});""",
            ),
        ],
    ),
    Template(
        id="job-queue",
        name="Background Job Queue",
        description="Scheduled and on-demand background jobs with retries",
        category="Jobs",
        difficulty=Difficulty.INTERMEDIATE,
        deploy_time="8s",
        features=["Background Jobs", "Cron Scheduling", "Retries", "Batch Processing"],
        files=[
            ProjectFile(
                path="src/jobs/main.ts",
                language="typescript",
                content="""import { backgroundJob } from 'motia';

export const dailyReportJob = backgroundJob({
  name: 'daily-report',
  schedule: '0 9 * * *',
  retries: 3,
  async handler() {
    return { generatedAt: new Date().toISOString() };
  },
});""",
            ),
        ],
    ),
    Template(
        id="ecommerce",
        name="E-commerce Backend",
        description="Cart, checkout and payment workflow for an online shop",
        category="E-commerce",
        difficulty=Difficulty.ADVANCED,
        deploy_time="15s",
        features=["Cart Management", "Payment Processing", "Inventory", "Order Emails"],
        files=[
            ProjectFile(
                path="src/workflows/checkout.ts",
                language="typescript",
                content="""import { workflow, Step } from 'motia';

export const validateCart = Step({
  name: 'validate-cart',
  async handler({ cartId }) {
    const cart = await db.cart.findUnique({ where: { id: cartId } });
    if (!cart || cart.items.length === 0) {
      throw new Error('Cart is empty');
    }
    return { cart };
  },
});

export const checkoutWorkflow = workflow({ name: 'checkout', steps: [validateCart] });""",
            ),
        ],
    ),
    Template(
        id="webhook-handler",
        name="Webhook Handler",
        description="Signed webhook receiver with idempotent event processing",
        category="Integrations",
        difficulty=Difficulty.BEGINNER,
        deploy_time="8s",
        features=["Signature Verification", "Idempotency", "Event Routing"],
        files=[
            ProjectFile(
                path="src/workflows/webhook.ts",
                language="typescript",
                content="""import { workflow, Step } from 'motia';

export const receiveWebhook = Step({
  name: 'receive-webhook',
  async handler(request) {
    return { received: true, event: request.body.type };
  },
});

export const webhookWorkflow = workflow({ name: 'webhook-handler', steps: [receiveWebhook] });""",
            ),
        ],
    ),
)


async def seed_templates(
    store: RecordStore, catalog: tuple[Template, ...] = TEMPLATE_CATALOG
) -> int:
    """Create catalog templates missing from the store.

    Returns:
        Number of templates created.
    """
    existing = {t.id for t in await store.list_templates()}
    created = 0
    for template in catalog:
        if template.id in existing:
            continue
        await store.create_template(template)
        created += 1
    if created:
        logger.info("templates_seeded", created=created, total=len(existing) + created)
    return created
