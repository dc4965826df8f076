"""Template-driven code generation by keyword matching.

Needs no provider and is deterministic: the same description and language
always yield the same files.
"""

from motia_studio.models import Language, ProjectFile, normalize_language

from .fallback import fallback_files

_PAYMENT_FILES = [
    ProjectFile(
        path="src/api/payment.ts",
        language="typescript",
        content="""import { Step } from 'motia';

// Payment processing endpoint
export const processPayment = Step({
  name: 'process-payment',
  async handler(request) {
    const { amount, cardToken, customerId } = request.body;
    if (!amount || !cardToken) {
      throw new Error('Missing required fields');
    }

    const result = await chargeCard(cardToken, amount);
    await saveTransaction({
      customerId,
      amount,
      status: result.success ? 'completed' : 'failed',
      timestamp: new Date(),
    });

    return { success: result.success, transactionId: result.id };
  },
});

async function chargeCard(token: string, amount: number) {
  return { success: true, id: 'txn_' + Date.now() };
}

async function saveTransaction(data: unknown) {
  console.log('Saving transaction:', data);
}""",
    ),
    ProjectFile(
        path="src/workflows/fraud-detection.ts",
        language="typescript",
        content="""import { workflow, Step } from 'motia';

export const fraudDetectionWorkflow = workflow({
  name: 'fraud-detection',
  steps: [
    Step({
      name: 'analyze-risk',
      async handler(transaction) {
        return { riskScore: await calculateRisk(transaction) };
      },
    }),
    Step({
      name: 'decide-action',
      async handler({ riskScore }) {
        return riskScore > 0.8 ? { action: 'block', reason: 'High risk' } : { action: 'approve' };
      },
    }),
  ],
});

async function calculateRisk(transaction: unknown): Promise<number> {
  return 0.1;
}""",
    ),
]

_WEBHOOK_FILES = [
    ProjectFile(
        path="src/workflows/webhook.ts",
        language="typescript",
        content="""import { workflow, Step } from 'motia';
import crypto from 'crypto';

export const receiveWebhook = Step({
  name: 'receive-webhook',
  async handler(request) {
    const signature = request.headers['x-signature'];
    if (!verifySignature(request.body, signature)) {
      throw new Error('Invalid signature');
    }
    return { received: true, event: request.body.type };
  },
});

export const webhookWorkflow = workflow({ name: 'webhook-handler', steps: [receiveWebhook] });

function verifySignature(payload: unknown, signature: string): boolean {
  const expected = crypto
    .createHmac('sha256', process.env.WEBHOOK_SECRET ?? '')
    .update(JSON.stringify(payload))
    .digest('hex');
  return expected === signature;
}""",
    ),
]

_ITEMS_FILES = [
    ProjectFile(
        path="src/api/items.ts",
        language="typescript",
        content="""import { Step } from 'motia';

// CREATE
export const createItem = Step({
  name: 'create-item',
  async handler(request) {
    const item = await db.items.create(request.body);
    return { success: true, data: item };
  },
});

// READ
export const getItems = Step({
  name: 'get-items',
  async handler() {
    return { success: true, data: await db.items.findMany() };
  },
});

// UPDATE
export const updateItem = Step({
  name: 'update-item',
  async handler(request) {
    const item = await db.items.update(request.params.id, request.body);
    return { success: true, data: item };
  },
});

// DELETE
export const deleteItem = Step({
  name: 'delete-item',
  async handler(request) {
    await db.items.delete(request.params.id);
    return { success: true };
  },
});""",
    ),
]


class TemplateCodeGenerator:
    """Picks canned TypeScript files by keyword.

    Other languages get the minimal skeleton for that language.
    """

    async def generate_code(
        self,
        description: str,
        language: Language,
        features: list[str] | None = None,
    ) -> list[ProjectFile]:
        language = normalize_language(language)
        if language is not Language.TYPESCRIPT:
            return fallback_files(description, language)

        words = description.lower()
        if "payment" in words:
            files = _PAYMENT_FILES
        elif "webhook" in words:
            files = _WEBHOOK_FILES
        else:
            files = _ITEMS_FILES
        return [f.model_copy() for f in files]
