from models.plan import Plan, PricedPlan

BILLING_CYCLES = ("monthly", "yearly")

PLANS = [
    Plan(
        id="starter",
        name="Starter",
        description="Perfect for early-stage startups and solo founders",
        monthly_price=29,
        yearly_price=290,
        features=[
            "1 AI Co-founder",
            "Basic pitch deck generator",
            "Simple financial modeling",
            "Email support",
        ],
        cta="Get Started",
    ),
    Plan(
        id="pro",
        name="Pro",
        description="Ideal for startups ready to scale and raise funding",
        monthly_price=79,
        yearly_price=790,
        features=[
            "3 AI Co-founders",
            "Advanced pitch deck generator",
            "Comprehensive financial modeling",
            "Investor simulation",
            "Priority support",
        ],
        cta="Go Pro",
        popular=True,
    ),
    Plan(
        id="enterprise",
        name="Enterprise",
        description="For established startups with complex needs",
        monthly_price=199,
        yearly_price=1990,
        features=[
            "Unlimited AI Co-founders",
            "Custom pitch deck templates",
            "Advanced financial scenarios",
            "Investor network access",
            "Dedicated account manager",
            "API access",
        ],
        cta="Contact Sales",
    ),
]


def get_discount_percentage(monthly, yearly):
    """Percentage saved by paying yearly instead of twelve monthly payments."""
    monthly_total = monthly * 12
    if monthly_total <= 0:
        return 0
    return round((monthly_total - yearly) / monthly_total * 100)


def get_plans(billing_cycle="monthly"):
    if billing_cycle not in BILLING_CYCLES:
        raise ValueError(f"Unknown billing cycle: {billing_cycle}")
    return [
        PricedPlan(
            **plan.model_dump(),
            billing_cycle=billing_cycle,
            price=plan.monthly_price if billing_cycle == "monthly" else plan.yearly_price,
            discount_percentage=get_discount_percentage(plan.monthly_price, plan.yearly_price),
        )
        for plan in PLANS
    ]
