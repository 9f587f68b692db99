from __future__ import annotations

from typing import List, Optional

from ..config import ISSUER_NAME, PLACEHOLDERS
from ..models import AgreementRecord, HardwareOption, PricingModel
from ..pdf.assemble import format_long_date
from ..pdf.blocks import (
    BulletList,
    CheckboxLine,
    Footnote,
    LabelValue,
    MinorHeading,
    Paragraph,
    Section,
    Spacer,
    SubsectionHeading,
)
from ..pdf.styles import PLACEHOLDER

SHORT_BLANK = "________"
OUTLET_PLACEHOLDER_ROWS = 4


def blank(value: Optional[str], fallback: str = PLACEHOLDER) -> str:
    return (value or "").strip() or fallback


def field_value(record: AgreementRecord, name: str) -> str:
    return blank(getattr(record, name), PLACEHOLDERS.get(name, PLACEHOLDER))


def outlet_items(record: AgreementRecord) -> List[str]:
    outlets = [o.strip() for o in record.covered_outlets if o and o.strip()]
    if not outlets:
        outlets = [PLACEHOLDER] * OUTLET_PLACEHOLDER_ROWS
    return [f"[F&B Outlet] & [Service area]: {o}" for o in outlets]


def _preamble(record: AgreementRecord) -> Section:
    return Section(
        title="",
        blocks=[
            Paragraph(
                f'This Pilot Agreement ("Agreement") is entered into between {ISSUER_NAME}, a Delaware '
                'corporation with its principal place of business in Florida ("Daze"), and:'
            ),
            Spacer(3),
            LabelValue("Client Legal Name:", field_value(record, "legal_entity_name")),
            LabelValue("DBA (Doing Business As):", field_value(record, "dba_name")),
            LabelValue("Address:", field_value(record, "billing_address")),
            LabelValue("Primary Contact:", field_value(record, "authorized_signer_name")),
            LabelValue("Title:", field_value(record, "authorized_signer_title")),
            LabelValue("Email:", field_value(record, "contact_email")),
            Spacer(3),
            Paragraph(
                '("Client") for the purpose of deploying and evaluating the Daze platform in a live '
                "operational environment. This Agreement reflects the parties' shared intent to proceed "
                "with a structured pilot as a step toward a long-term commercial relationship governed by "
                'Daze\'s Master Services Agreement ("MSA").'
            ),
        ],
    )


def _purpose() -> Section:
    return Section(
        title="1. Pilot Purpose",
        blocks=[
            Paragraph("The purpose of this pilot is to deploy the Daze platform within select Client locations to:"),
            BulletList(
                [
                    "Validate operational workflows and staff adoption.",
                    "Improve guest ordering convenience and overall experience.",
                    "Measure service efficiency, labor impact, and operational benefits.",
                    "Evaluate revenue performance, guest adoption rates, and return on investment.",
                ]
            ),
            Footnote(
                "The pilot is intended as a pre-commercial implementation to demonstrate operational readiness "
                "and mutual fit, not as a proof-of-concept or technology validation exercise."
            ),
        ],
    )


def _scope(record: AgreementRecord) -> Section:
    hw_daze = record.hardware_option == HardwareOption.DAZE_PROVIDED
    blocks = [
        SubsectionHeading("2.1 Covered Outlets"),
        Paragraph("The Pilot will be conducted at the following F&B outlets and Serviceable areas:"),
        Paragraph("Pool/Beach/Room/Common Space area"),
        BulletList(outlet_items(record)),
        Spacer(),
        SubsectionHeading("2.2 Products and Services"),
        Paragraph(
            "The Pilot may include one or more Daze products, which shall be deployed and rolled out "
            'according to a written implementation schedule agreed by both parties ("Implementation '
            'Schedule"). Rollout of additional products beyond the initial scope requires written approval '
            "from both parties and may trigger revised pilot terms."
        ),
        Paragraph("Available products include:"),
        BulletList(
            [
                "Pool & Beach Mobile Ordering: Digital ordering and payment facilitation for outdoor beach "
                "and pool areas.",
                "Common Space Digital Ordering: Digital ordering and payment facilitation for indoor common areas.",
                "Table Pay & Order: Digital menu access, ordering, and payment for restaurant tables and "
                "dining areas.",
                "In-Room Dining: Full digital menu access and ordering for guest rooms and suites.",
            ]
        ),
        Spacer(),
        SubsectionHeading("2.3 Hardware Selection"),
        CheckboxLine(not hw_daze, "No Daze Hardware Required"),
        CheckboxLine(
            hw_daze,
            "Daze-Provided Hardware. Daze shall provide the following physical materials as a bailment "
            "under Section 4.3",
        ),
    ]
    if hw_daze:
        blocks.append(
            BulletList(
                [
                    f"Number of Tablets: {blank(record.num_tablets, '__________')}",
                    f"Mounts/Stands: {blank(record.mounts_stands, '____________')}",
                ]
            )
        )
    blocks += [
        Spacer(),
        SubsectionHeading("2.4 Enabled Capabilities"),
        Paragraph("During the Pilot Term, Daze shall provide the following capabilities:"),
        BulletList(
            [
                "Guest mobile ordering via smartphone or tablet.",
                "Payment processing and facilitation (Client remains merchant of record).",
                "Location-based delivery coordination to beach chairs, poolside loungers, guest rooms, "
                "and designated areas.",
                "Management reporting and analytics dashboard.",
                "POS integration with Client's designated point-of-sale system(s).",
                "QR Code Access Points: Design and provision of branded QR code signage for guest access; "
                "Client may also utilize Daze-approved digital QR assets for integration into Client-owned "
                "physical materials or signage.",
            ]
        ),
    ]
    return Section(title="2. Pilot Scope", blocks=blocks)


def _term(record: AgreementRecord) -> Section:
    start = format_long_date(record.start_date) if record.start_date else PLACEHOLDER
    days = str(record.pilot_term_days) if record.pilot_term_days is not None else SHORT_BLANK
    return Section(
        title="3. Pilot Term",
        blocks=[
            Paragraph(
                'The pilot shall commence on the "Start Date" specified below and continue for the "Pilot '
                'Term" specified below, unless terminated earlier in accordance with Section 9.'
            ),
            Spacer(),
            LabelValue("Start Date:", start),
            LabelValue("Pilot Term:", f"{days} days (recommended: 60-90 days)"),
            Spacer(),
            Paragraph("The Pilot Term may be extended by mutual written agreement of both parties."),
        ],
    )


def _responsibilities() -> Section:
    return Section(
        title="4. Responsibilities",
        blocks=[
            SubsectionHeading("4.1 Daze Responsibilities"),
            Paragraph("Daze shall:"),
            BulletList(
                [
                    "Configure and deploy the platform for Covered Outlets according to the Implementation Schedule.",
                    "Provide onboard training for Client staff.",
                    "Provide operational support during business hours.",
                    "Monitor platform performance and provide reporting during the Pilot Term.",
                    "Integrate with Client's designated POS system(s) as specified in Section 13.2.",
                ]
            ),
            Spacer(),
            SubsectionHeading("4.2 Client Responsibilities"),
            Paragraph("Client shall:"),
            BulletList(
                [
                    "Provide operational access to Covered Outlets, including Wi-Fi connectivity and power access.",
                    "Ensure staff participation in training and day-to-day platform operation.",
                    "Designate a primary point of contact with authority to make operational decisions.",
                    "Provide timely feedback on platform performance and guest experience.",
                    "Maintain PCI DSS compliance for its payment processing systems.",
                    "Provide API credentials and technical documentation for POS integration.",
                ]
            ),
            Spacer(),
            SubsectionHeading("4.3 Hardware & Physical Materials"),
            Paragraph(
                "If selected in Section 2.3, Daze shall provide Client with hardware and physical materials "
                '("Hardware"). All such Hardware remains the sole property of Daze and is subject to the '
                "following terms:"
            ),
            Paragraph(
                "Ownership: All Hardware remains the sole and exclusive property of Daze. This Agreement "
                "constitutes a bailment of Hardware for the Pilot Term only."
            ),
            Paragraph(
                "Standard of Care: Client shall be responsible for the care, security, and proper use of the "
                "Hardware and shall protect it from loss, theft, or damage beyond normal wear and tear."
            ),
            Paragraph(
                "Restrictions: Client shall not sell, transfer, modify, or repurpose the Hardware and shall "
                "ensure it is used solely by authorized staff for the Services."
            ),
            Paragraph(
                "Recovery & Reimbursement: Upon termination or expiration of the Pilot Term, Client shall "
                "return all Hardware to Daze within seven (7) days. If Hardware is not returned or is returned "
                "in a damaged state, Client shall reimburse Daze for the full replacement cost at then-current "
                "market rates."
            ),
            Paragraph(
                "QR Code IP: QR code designs and branding provided by Daze are the Intellectual Property of "
                "Daze and are licensed to Client solely for use with the Daze platform during the Pilot Term."
            ),
        ],
    )


def _fees(record: AgreementRecord) -> Section:
    pm = record.pricing_model
    amount = blank(record.pricing_amount, SHORT_BLANK)

    def amount_for(model: PricingModel) -> str:
        return amount if pm == model else SHORT_BLANK

    return Section(
        title="5. Pilot Fees",
        blocks=[
            Paragraph(
                "Pilot pricing is agreed separately below and does not establish precedent for long-term "
                "pricing under any MSA or Order Form."
            ),
            Paragraph("Select one pricing model:"),
            Spacer(),
            MinorHeading("5.1 No Fees"),
            CheckboxLine(pm == PricingModel.NONE, "No fees apply during the Pilot Term."),
            Spacer(),
            MinorHeading("5.2 Subscription Platform Fee"),
            CheckboxLine(
                pm == PricingModel.SUBSCRIPTION,
                f"Client agrees to pay Daze a platform subscription fee of ${amount_for(PricingModel.SUBSCRIPTION)} "
                "for access and use of the Daze platform and related services during the Pilot Term.",
            ),
            Spacer(),
            MinorHeading("5.3 Daze Revenue Share Fee"),
            CheckboxLine(
                pm == PricingModel.DAZE_REV_SHARE,
                f"During the Pilot Term, Daze shall retain a fee equal to {amount_for(PricingModel.DAZE_REV_SHARE)}% "
                "of the gross transaction value of each completed order processed through the platform. The "
                "remaining net proceeds, including applicable food and beverage revenue and tips, shall be "
                "remitted to Client in accordance with Section 6.",
            ),
            Footnote(
                "Daze acts solely as a payment facilitation agent and does not purchase, resell, or take "
                "ownership of any food, beverage, or tip amounts."
            ),
            Spacer(),
            MinorHeading("5.4 Client Revenue Share Fee"),
            CheckboxLine(
                pm == PricingModel.CLIENT_REV_SHARE,
                "During the Pilot Term, Client shall pay Daze a revenue-share fee equal to "
                f"{amount_for(PricingModel.CLIENT_REV_SHARE)}% of the gross food and beverage sales value of "
                "each completed order processed through the platform. Such revenue-share fees shall be borne "
                "solely by Client and shall not be presented to or charged to guests.",
            ),
            Footnote(
                "Daze acts strictly as a technology provider and payment facilitation agent and does not "
                "purchase, resell, or take ownership of any food, beverage, or tip amounts. All guest payments "
                "represent the Client's food and beverage sales."
            ),
            Spacer(),
            SubsectionHeading("5.5 Payment Terms"),
            Paragraph(
                "Any pilot fees will be invoiced by Daze and are due Net 7 from the invoice date, unless "
                "otherwise agreed in writing. Pilot fees are provided solely for evaluation purposes and do "
                "not establish pricing, discounts, or commercial terms for any future agreement."
            ),
            Paragraph(
                "Any continued use of the Services following the Pilot Term will be governed exclusively by a "
                'mutually executed Master Services Agreement ("MSA") and applicable Order Form.'
            ),
        ],
    )


def _settlement() -> Section:
    return Section(
        title="6. Settlement, Tips, and Chargebacks",
        blocks=[
            SubsectionHeading("6.1 Settlement"),
            Paragraph(
                "Net food and beverage proceeds, less applicable platform fees, are remitted to Client on a "
                "Net 7 settlement basis measured from the applicable settlement statement date, unless "
                "otherwise specified. Settlement payments will be made via ACH to Client's designated bank "
                "account."
            ),
            Footnote(
                "Minimum Settlement Threshold: Daze may accumulate settlements and remit when the balance "
                "exceeds $250. Balances below this threshold shall be remitted quarterly."
            ),
            Spacer(),
            SubsectionHeading("6.2 Tips and Gratuities"),
            Paragraph(
                "All customer tips and gratuities are pass-through funds, are not revenue of Daze, are "
                "excluded from platform fee calculations, and are not subject to settlement timing. Daze may "
                "hold tips in reserve to cover chargebacks, refunds, or payment disputes, releasing them to "
                "Client upon resolution."
            ),
            Spacer(),
            SubsectionHeading("6.3 Payment Disputes and Chargebacks"),
            Paragraph(
                "Client remains solely responsible for all refunds, returns, chargebacks, payment disputes, "
                "and fraudulent transactions. Daze may deduct chargeback amounts, dispute fees, and associated "
                "costs from future settlements or invoice Client directly within seven (7) days."
            ),
            Paragraph(
                "If chargeback rates exceed 2% of gross transaction volume in any month, Daze may, at its sole "
                "discretion: (a) suspend revenue share settlements and require pre-payment; (b) increase the "
                "revenue share percentage by 1% to offset risk; or (c) terminate this Agreement upon fourteen "
                "(14) days' written notice."
            ),
        ],
    )


def _checkpoint() -> Section:
    return Section(
        title="7. Pilot Success Checkpoint & Continuity Clause",
        blocks=[
            Paragraph(
                "During the Pilot Term, the parties agree to conduct a good-faith review of pilot performance, "
                'operational workflows, and guest adoption (the "Pilot Success Checkpoint"), typically '
                "scheduled 14–21 days prior to the end of the Pilot Term. The Pilot Success Checkpoint is "
                "intended to assess whether the Services meet the Client's operational and experiential "
                "objectives and whether the parties wish to continue the relationship under a commercial "
                'agreement governed by Daze\'s Master Services Agreement ("MSA") and an applicable Order Form.'
            ),
            Paragraph(
                "Participation in the Pilot Success Checkpoint does not obligate either party to enter into a "
                "commercial agreement, and either party may terminate the Pilot in accordance with this "
                "Agreement. Unless the Client provides written notice of termination within fourteen (14) days "
                "following the end of the Pilot Term, the Services may continue on an interim basis under the "
                "terms of this Pilot Agreement solely to facilitate transition discussions, until an MSA and "
                "Order Form are executed or the Services are terminated."
            ),
            Footnote(
                "Client acknowledges that POS integration may require coordination with third-party POS "
                "vendors, and Daze is not responsible for delays or failures caused by such third parties."
            ),
        ],
    )


def _data_security() -> Section:
    return Section(
        title="8. Data, Security, and Confidentiality",
        blocks=[
            SubsectionHeading("8.1 Data Ownership & Sovereignty"),
            BulletList(
                [
                    "Daze IP: Daze retains all rights, title, and interest in and to the Daze platform, software, "
                    "algorithms, documentation, and related intellectual property.",
                    "Client Data: Client retains all right, title, and interest in and to all guest data, "
                    'transaction records, and operational information processed through the Platform ("Client '
                    'Data").',
                ]
            ),
            Spacer(),
            SubsectionHeading('8.2 Data License (The "Valuation" Clause)'),
            Paragraph(
                "Client grants Daze a non-exclusive, perpetual, irrevocable, royalty-free license to use Client "
                'Data solely in aggregated and de-identified form ("Aggregated Data"). Daze may use Aggregated '
                "Data for benchmarking, service improvement, analytics, and industry reporting, provided that "
                "such data does not identify Client, any individual guest, or specific transactions."
            ),
            Spacer(),
            SubsectionHeading("8.3 Security Standards & SOC-2 Alignment"),
            Paragraph(
                "Daze maintains administrative, technical, and physical safeguards designed to protect the "
                "integrity and confidentiality of Client Data. The Platform architecture is aligned with SOC 2 "
                "Trust Services Criteria (Security, Availability, and Confidentiality) and is hosted on "
                "enterprise-grade infrastructure providers (e.g., AWS) that maintain current SOC 2 Type II "
                "certifications."
            ),
            Spacer(),
            SubsectionHeading("8.4 Encryption & Access Control"),
            Paragraph(
                "All Client Data is encrypted using AES-256 at rest and TLS 1.2 or higher in transit. Daze "
                "employs multi-factor authentication (MFA) and least-privilege access controls for all "
                "administrative and backend systems."
            ),
            Spacer(),
            SubsectionHeading("8.5 Privacy & PII Compliance Protection"),
            Paragraph(
                "Daze shall not sell, rent, or share guest Personally Identifiable Information (PII) with third "
                "parties (except as required for payment processing via authorized subcontractors). Any data "
                "used for platform optimization or performance analytics must be strictly anonymized."
            ),
            Spacer(),
            SubsectionHeading("8.6 PCI DSS Compliance"),
            Paragraph(
                "The Platform is designed so that no raw credit card data is stored on Daze-managed servers. "
                "All payment processing is facilitated through PCI-compliant third-party gateways (e.g., "
                "Stripe), ensuring the Client's environment remains secure and compliant with global payment "
                "standards. Client is responsible for maintaining PCI DSS compliance for its own operations and "
                "on-premises networks."
            ),
            Spacer(),
            SubsectionHeading("8.7 Incident Response"),
            Paragraph(
                "In the event of a confirmed security breach involving Client Data, Daze will notify the Client "
                "within forty-eight (48) hours of discovery and provide reasonable cooperation in any subsequent "
                "investigation or remediation efforts."
            ),
            Spacer(),
            SubsectionHeading("8.8 Confidentiality"),
            Paragraph(
                "Both parties agree to maintain the confidentiality of non-public information disclosed during "
                "the Pilot, using reasonable care for a period of three (3) years from the date of disclosure."
            ),
        ],
    )


def _termination() -> Section:
    return Section(
        title="9. Termination",
        blocks=[
            Paragraph("Either party may terminate this Agreement upon fourteen (14) days' written notice to the other party."),
            Paragraph(
                "Upon termination: (a) Client shall immediately cease use of the platform; (b) Daze shall "
                "provide final settlement within fourteen (14) days; (c) each party shall return or destroy "
                "the other's Confidential Information."
            ),
        ],
    )


def _indemnification() -> Section:
    return Section(
        title="10. Indemnification",
        blocks=[
            Paragraph(
                "Client shall indemnify, defend, and hold harmless Daze and its officers, directors, employees, "
                "and agents from and against any and all claims, damages, losses, liabilities, costs, and "
                "expenses (including reasonable attorneys' fees) arising out of or relating to:"
            ),
            BulletList(
                [
                    "Client's use of the Services in violation of this Agreement.",
                    "Any food, beverage, or product sold or delivered by Client.",
                    "Any guest complaint, injury, or claim related to Client's operations.",
                    "Client's breach of PCI DSS or payment processing obligations.",
                    "Client's negligence or willful misconduct.",
                    "Any claim that Client data or content infringes third-party intellectual property rights.",
                ]
            ),
        ],
    )


def _liability() -> Section:
    return Section(
        title="11. Limitation of Liability",
        blocks=[
            Paragraph("TO THE MAXIMUM EXTENT PERMITTED BY LAW:"),
            BulletList(
                [
                    "NEITHER PARTY'S LIABILITY SHALL EXCEED FEES PAID BY CLIENT UNDER THIS AGREEMENT;",
                    "NEITHER PARTY SHALL BE LIABLE FOR INDIRECT, INCIDENTAL, CONSEQUENTIAL, SPECIAL, OR PUNITIVE "
                    "DAMAGES, INCLUDING LOST PROFITS, LOST DATA, OR BUSINESS INTERRUPTION.",
                ]
            ),
            Paragraph(
                "THESE LIMITATIONS DO NOT APPLY TO: BREACHES OF CONFIDENTIALITY, IP INFRINGEMENT, "
                "INDEMNIFICATION OBLIGATIONS, GROSS NEGLIGENCE, WILLFUL MISCONDUCT, OR AMOUNTS THAT CANNOT BE "
                "LIMITED UNDER APPLICABLE LAW."
            ),
        ],
    )


def _service_levels() -> Section:
    return Section(
        title="12. Service Level Agreement",
        blocks=[
            Paragraph(
                "Daze targets 99.5% platform uptime during Client's operating hours (excluding scheduled "
                'maintenance). "Uptime" means the platform is accessible and processing transactions.'
            ),
            Paragraph(
                "Scheduled maintenance shall not exceed four (4) hours monthly and shall be conducted during "
                "low-traffic periods with 48 hours' advance notice."
            ),
            Paragraph(
                "Daze does not guarantee uptime for issues caused by: third-party services (including POS "
                "systems), Client's internet connectivity, force majeure events, or Client's misuse of the "
                "platform."
            ),
        ],
    )


MISC_CLAUSES = [
    (
        "13.3 Governing Law",
        "This Agreement is governed by and construed in accordance with the laws of the State of Florida, "
        "without regard to its conflict of laws principles.",
    ),
    (
        "13.4 Dispute Resolution",
        "Any dispute arising out of or relating to this Agreement shall first be resolved through good faith "
        "negotiation between senior executives of both parties. If the dispute cannot be resolved within "
        "thirty (30) days, either party may pursue any remedy available at law or in equity in the state or "
        "federal courts located in Miami-Dade County, Florida.",
    ),
    (
        "13.5 Entire Agreement",
        "This Agreement constitutes the entire agreement between the parties regarding the subject matter "
        "hereof and supersedes all prior agreements, LOIs, and understandings.",
    ),
    (
        "13.6 Amendment",
        "This Agreement may not be amended except by written instrument signed by both parties.",
    ),
    (
        "13.7 Assignment",
        "Neither party may assign this Agreement without prior written consent, except to affiliates or in "
        "connection with a merger, acquisition, or sale of substantially all assets.",
    ),
    (
        "13.8 Force Majeure",
        "Neither party is liable for delays or failures caused by events beyond reasonable control, including "
        "acts of God, natural disasters, war, terrorism, government actions, internet outages, third-party "
        "service failures, or pandemics.",
    ),
    (
        "13.9 Severability",
        "If any provision is held invalid, the remaining provisions shall continue in full force and effect.",
    ),
    (
        "13.10 Counterparts",
        "This Agreement may be executed in counterparts, each of which shall be deemed an original.",
    ),
]


def _miscellaneous(record: AgreementRecord) -> Section:
    blocks = [
        SubsectionHeading("13.1 Subcontractors"),
        Paragraph(
            "Daze may use third-party subcontractors (including AWS for hosting, payment processors, and "
            "analytics providers) to perform Services. Daze remains responsible for subcontractor performance. "
            "Daze shall maintain a list of material subcontractors available upon request and shall notify "
            "Client of any changes to material subcontractors thirty (30) days in advance."
        ),
        Spacer(),
        SubsectionHeading("13.2 POS Integration"),
        Paragraph("Daze will integrate with Client's designated POS system(s) as specified in the Implementation Schedule."),
        LabelValue("POS System:", blank(record.pos_system)),
        LabelValue("Version:", blank(record.pos_version)),
        LabelValue("API Key:", blank(record.pos_api_key)),
        LabelValue("Who to Contact:", blank(record.pos_contact)),
        Spacer(),
        Paragraph("Client is responsible for:"),
        BulletList(
            [
                "Providing API credentials, technical documentation, and test environmental access.",
                "Designating a technical point of contact with appropriate technical knowledge.",
                "Testing and validating integration functionality before go-live.",
                "Promptly reporting integration issues and cooperating in resolution.",
            ]
        ),
        Footnote(
            "Daze does not warrant compatibility with all POS versions, configurations, or customizations. "
            "Daze's liability for integration failures is limited to commercially reasonable efforts to resolve "
            "issues and does not include lost revenue, data corruption, or operational downtime."
        ),
    ]
    for heading, text in MISC_CLAUSES:
        blocks += [Spacer(), SubsectionHeading(heading), Paragraph(text)]
    return Section(title="13. Miscellaneous", blocks=blocks)


def build_sections(record: AgreementRecord) -> List[Section]:
    return [
        _preamble(record),
        _purpose(),
        _scope(record),
        _term(record),
        _responsibilities(),
        _fees(record),
        _settlement(),
        _checkpoint(),
        _data_security(),
        _termination(),
        _indemnification(),
        _liability(),
        _service_levels(),
        _miscellaneous(record),
    ]
