from __future__ import annotations

from typing import Any

DEFAULT_SERVICE = "General Services"

WEBSITE_PAGES = [
    "Home",
    "About",
    "Contact",
    "Services",
    "Products",
    "Shop/Store",
    "Cart/Checkout",
    "Search",
    "Reviews/Ratings",
    "Wishlist",
    "Order Tracking",
    "Account/Login",
    "User Dashboard",
    "Admin Dashboard",
    "Analytics Dashboard",
    "Notifications",
    "Chat/Support Widget",
    "Blog",
    "FAQ",
    "Testimonials",
    "Pricing",
    "Portfolio/Gallery",
    "Book Now",
    "3D Animations",
    "3D Model Viewer",
    "None",
]

SERVICE_BANKS: dict[str, dict[str, Any]] = {
    "Website Development": {
        "aliases": ["website", "web development", "website development", "web-development"],
        "opening_message": "Hey! Ready to build your website? Tell me a bit about what you have in mind.",
        "details": (
            "Stacks: WordPress, Shopify, React.js, Next.js, custom React.js + Node.js\n"
            "Minimums: WordPress/Shopify ₹30,000 | React.js ₹60,000 | Custom Shopify ₹80,000 | "
            "Custom React.js + Node.js ₹1,50,000 | Next.js ₹1,75,000 | 3D custom ₹1,00,000-₹4,00,000"
        ),
        "questions": [
            {
                "id": "W1",
                "next_id": "W2",
                "start": True,
                "key": "name",
                "patterns": ["name", "call you"],
                "templates": ["What's your name?", "Before we dive in, what should I call you?"],
            },
            {
                "id": "W2",
                "next_id": "W3",
                "key": "company",
                "patterns": ["company", "business", "brand"],
                "templates": ["Nice to meet you, {name}! What's your company or project called?"],
                "required": False,
            },
            {
                "id": "W3",
                "next_id": "W4",
                "key": "website_type",
                "patterns": ["website type", "kind of website", "type of site"],
                "templates": ["What kind of website do you need?"],
                "suggestions": [
                    "Business Website",
                    "E-commerce",
                    "Portfolio",
                    "Landing Page",
                    "Blog/Magazine",
                    "Web App",
                ],
            },
            {
                "id": "W4",
                "next_id": "W5",
                "key": "description",
                "patterns": ["brief", "summary", "describe", "about the project"],
                "templates": ["Tell me a bit about the project. What should the website do for your visitors?"],
            },
            {
                "id": "W5",
                "next_id": "W6",
                "key": "pages",
                "patterns": ["pages", "features", "sections"],
                "templates": ["Which pages or features do you need? (Select all that apply)"],
                "suggestions": WEBSITE_PAGES,
                "multi_select": True,
                "required": True,
            },
            {
                "id": "W6",
                "next_id": "W7",
                "key": "integrations",
                "patterns": ["integrations", "integrate", "payment gateway", "analytics"],
                "templates": ["Any integrations you need? (Select all that apply)"],
                "suggestions": [
                    "Payment Gateway (Razorpay/Stripe)",
                    "WhatsApp",
                    "Email Marketing",
                    "CRM",
                    "Google Analytics",
                    "Shipping (Shiprocket)",
                    "None",
                ],
                "multi_select": True,
                "required": False,
            },
            {
                "id": "W7",
                "next_id": "W8",
                "key": "tech",
                "patterns": ["tech stack", "technology", "framework", "stack"],
                "templates": ["Do you have a preferred tech stack?"],
                "suggestions": [
                    "WordPress",
                    "Shopify",
                    "Custom Shopify (Hydrogen)",
                    "React.js",
                    "Next.js",
                    "React.js + Node.js (MERN)",
                    "Not sure yet",
                ],
                "required": True,
            },
            {
                "id": "W8",
                "next_id": "W9",
                "key": "deployment",
                "patterns": ["deploy", "deployment", "hosting", "host"],
                "templates": ["Where would you like the site hosted?"],
                "suggestions": ["Vercel", "Netlify", "AWS", "Hostinger", "Render", "Not sure yet"],
                "required": False,
            },
            {
                "id": "W9",
                "next_id": "W10",
                "key": "budget",
                "patterns": ["budget", "cost", "price"],
                "templates": ["What's your budget for this project? The minimum for this scope is {min_budget}."],
            },
            {
                "id": "W10",
                "key": "timeline",
                "patterns": ["timeline", "deadline", "when"],
                "templates": ["When do you need the website ready?"],
                "suggestions": ["2-3 weeks", "1 month", "1-2 months", "2-3 months", "Flexible"],
            },
        ],
    },
    "App Development": {
        "aliases": ["app", "mobile app", "app development", "app-development"],
        "opening_message": "Hey! Ready to build your app? Tell me what you have in mind!",
        "details": (
            "Sub-types: Android App, iOS App, Cross-platform (Flutter / React Native), App Maintenance\n"
            "Pricing: MVP ₹2,00,000-₹4,00,000 | Advanced ₹5,00,000-₹12,00,000 | Maintenance ₹15,000-₹40,000/month"
        ),
        "questions": [
            {
                "id": "A1",
                "next_id": "A2",
                "key": "name",
                "templates": ["What's your name?"],
            },
            {
                "id": "A2",
                "next_id": "A3",
                "key": "platform",
                "patterns": ["app type", "platform", "android", "ios", "both"],
                "templates": ["Nice to meet you, {name}! Which platform should the app run on?"],
                "suggestions": ["Android", "iOS", "Both (Android + iOS)"],
                "required": True,
            },
            {
                "id": "A3",
                "next_id": "A4",
                "key": "brief",
                "patterns": ["brief", "summary", "overview", "requirements"],
                "templates": ["Please share a short brief of what you need (2-3 lines)."],
            },
            {
                "id": "A4",
                "next_id": "A5",
                "key": "project_stage",
                "patterns": ["new app", "upgrade", "existing"],
                "templates": ["Is this a new app or an upgrade to an existing one?"],
                "suggestions": ["New app", "Upgrade existing app"],
            },
            {
                "id": "A5",
                "next_id": "A6",
                "key": "design_assets",
                "patterns": ["wireframes", "designs", "figma"],
                "templates": ["Do you have wireframes or designs ready?"],
                "suggestions": ["Yes", "No", "In progress"],
                "required": False,
            },
            {
                "id": "A6",
                "next_id": "A7",
                "key": "core_features",
                "patterns": ["features", "login", "payments", "chat"],
                "templates": ["What core features do you need?"],
                "suggestions": [
                    "Login/Auth",
                    "Payments",
                    "Chat/Messaging",
                    "Push Notifications",
                    "Maps/Location",
                    "User Profiles",
                    "Other",
                ],
                "multi_select": True,
                "required": True,
            },
            {
                "id": "A7",
                "next_id": "A8",
                "key": "backend",
                "patterns": ["admin panel", "backend", "api"],
                "templates": ["Do you need an admin panel and backend?"],
                "suggestions": ["Yes", "No", "Not sure"],
                "required": False,
            },
            {
                "id": "A8",
                "next_id": "A9",
                "key": "budget",
                "patterns": ["budget", "cost", "price"],
                "templates": ["What's your budget range for the app?"],
                "suggestions": ["₹2,00,000–₹4,00,000", "₹5,00,000–₹12,00,000", "Not sure yet"],
            },
            {
                "id": "A9",
                "key": "timeline",
                "patterns": ["timeline", "deadline", "when"],
                "templates": ["When would you like to launch?"],
                "suggestions": ["8–10 weeks", "10–14 weeks", "Flexible"],
            },
        ],
    },
    "CRM & ERP Solutions": {
        "aliases": ["crm", "erp", "crm and erp", "crm-and-erp-solutions"],
        "opening_message": "Hi! Let's streamline your operations with the right CRM/ERP setup. What's your name?",
        "questions": [
            {
                "id": "C1",
                "next_id": "C2",
                "key": "name",
                "patterns": ["name", "call you"],
                "templates": ["What's your name?"],
            },
            {
                "id": "C2",
                "next_id": "C3",
                "key": "company",
                "patterns": ["company", "business", "brand"],
                "templates": ["Nice to meet you, {name}! What's your company name?"],
            },
            {
                "id": "C3",
                "next_id": "C4",
                "key": "solution_type",
                "patterns": ["crm", "erp", "automation", "workflow"],
                "templates": ["What do you need help with?"],
                "suggestions": ["CRM Setup", "ERP Customization", "Workflow Automation", "Not sure yet"],
                "tags": ["service_type"],
            },
            {
                "id": "C4",
                "next_id": "C5",
                "key": "modules",
                "patterns": ["modules", "features", "pipeline", "inventory", "billing"],
                "templates": ["Which modules/features are needed? (Select all that apply)"],
                "suggestions": [
                    "Sales pipeline",
                    "Leads",
                    "Customer support",
                    "Inventory/Stock",
                    "Invoicing/Billing",
                    "Reports/Analytics",
                    "User roles/permissions",
                    "Other",
                ],
                "multi_select": True,
                "required": True,
            },
            {
                "id": "C5",
                "next_id": "C6",
                "key": "integrations",
                "patterns": ["integrations", "integrate", "api", "tools"],
                "templates": ["Any integrations required? (Select all that apply)"],
                "suggestions": ["Email", "WhatsApp", "Payment gateway", "Google Sheets", "Other", "None"],
                "multi_select": True,
            },
            {
                "id": "C6",
                "next_id": "C7",
                "key": "users",
                "patterns": ["users", "team", "logins", "seats"],
                "templates": ["How many users will use the system?"],
                "expected_type": "number_range",
                "examples": ["1–5", "6–20", "50+"],
            },
            {
                "id": "C7",
                "next_id": "C8",
                "key": "budget",
                "patterns": ["budget", "cost", "price"],
                "templates": ["What's your budget range for this project?"],
                "suggestions": ["₹50,000–₹2,00,000", "₹2,00,000–₹5,00,000", "₹5,00,000+", "Not sure yet"],
            },
            {
                "id": "C8",
                "key": "timeline",
                "patterns": ["timeline", "deadline", "when"],
                "templates": ["When do you need this delivered?"],
                "suggestions": ["2–3 weeks", "4–10 weeks", "Flexible"],
            },
        ],
    },
    "WhatsApp Chat Bot": {
        "aliases": ["whatsapp", "whatsapp bot", "whatsapp-chat-bot"],
        "opening_message": "Hi! Let's build a WhatsApp bot for your business. What's your name?",
        "questions": [
            {"id": "B1", "next_id": "B2", "key": "name", "templates": ["What's your name?"]},
            {
                "id": "B2",
                "next_id": "B3",
                "key": "business",
                "patterns": ["business", "company", "brand"],
                "templates": ["Nice to meet you, {name}! What's your business/brand name?"],
                "tags": ["company"],
            },
            {
                "id": "B3",
                "next_id": "B4",
                "key": "bot_type",
                "patterns": ["lead", "sales", "support", "bot type"],
                "templates": ["What type of WhatsApp bot do you need?"],
                "suggestions": ["Lead Capture Bot", "Sales Bot", "Support Bot"],
            },
            {
                "id": "B4",
                "next_id": "B5",
                "key": "features",
                "patterns": ["features", "flow", "faq", "handoff", "tracking"],
                "templates": ["What should the bot handle? (Select all that apply)"],
                "suggestions": [
                    "Lead capture",
                    "FAQs",
                    "Product/service info",
                    "Order updates",
                    "Order tracking",
                    "Human handoff to agent",
                    "Broadcast messages",
                    "Other",
                ],
                "multi_select": True,
                "max_select": 5,
                "tags": ["deliverables"],
            },
            {
                "id": "B5",
                "next_id": "B6",
                "key": "budget",
                "patterns": ["budget", "cost", "price"],
                "templates": ["What's your budget for the setup?"],
                "suggestions": ["₹15,000–₹50,000", "₹50,000+", "Not sure yet"],
            },
            {
                "id": "B6",
                "key": "timeline",
                "patterns": ["timeline", "when", "deadline"],
                "templates": ["When do you want the bot ready?"],
                "suggestions": ["7–14 days", "2–4 weeks", "Flexible"],
            },
        ],
    },
    "Performance Marketing": {
        "aliases": ["ads", "paid ads", "performance marketing", "performance-marketing"],
        "opening_message": "Hi! Ready to run some high-converting ads? Let's get started!",
        "questions": [
            {"id": "P1", "next_id": "P2", "key": "name", "templates": ["What's your name?"]},
            {
                "id": "P2",
                "next_id": "P3",
                "key": "platforms",
                "patterns": ["platforms", "meta", "google", "linkedin"],
                "templates": ["Which platforms do you want to advertise on?"],
                "suggestions": ["Meta", "Google", "LinkedIn", "Multiple"],
                "required": True,
            },
            {
                "id": "P3",
                "next_id": "P4",
                "key": "objective",
                "patterns": ["objective", "goal", "leads", "sales", "traffic"],
                "templates": ["What is the main objective of the campaign?"],
                "suggestions": ["Leads", "Sales", "Traffic", "App installs"],
            },
            {
                "id": "P4",
                "next_id": "P5",
                "key": "ad_budget",
                "patterns": ["ad budget", "ad spend", "monthly spend", "monthly budget"],
                "templates": ["What is your ad budget per month?"],
            },
            {
                "id": "P5",
                "next_id": "P6",
                "key": "creative_scope",
                "patterns": ["creatives", "copies", "campaign management"],
                "templates": ["Do you need creatives and copies, or only campaign management?"],
                "suggestions": ["Need creatives and copies", "Campaign management only", "Not sure"],
                "required": False,
            },
            {
                "id": "P6",
                "key": "timeline",
                "patterns": ["duration", "timeline", "campaign length"],
                "templates": ["How long should the campaign run?"],
                "suggestions": ["1 month", "3 months", "6 months", "Ongoing"],
            },
        ],
    },
    "Social Media Management": {
        "aliases": ["social media", "smm", "instagram management", "social-media-management"],
        "opening_message": "Hi! Let's grow your social presence. What's your name?",
        "questions": [
            {"key": "name", "templates": ["What's your name?"]},
            {
                "key": "brand",
                "templates": ["Nice to meet you, {name}! Which brand are we managing?"],
                "required": False,
            },
            {
                "key": "platforms",
                "templates": ["Which platforms should we manage? (Select all that apply)"],
                "suggestions": ["Instagram", "Facebook", "LinkedIn", "YouTube", "X (Twitter)"],
                "multi_select": True,
                "required": True,
            },
            {
                "key": "posts_per_month",
                "templates": ["How many posts per month are you looking for?"],
                "expected_type": "number_range",
                "required": False,
            },
            {
                "key": "goal",
                "templates": ["What's the main goal? More followers, leads or brand awareness?"],
                "required": False,
            },
            {
                "key": "budget",
                "templates": ["What's your monthly budget for social media management?"],
                "suggestions": ["₹15,000–₹30,000 per month", "₹30,000–₹60,000 per month", "Not sure yet"],
            },
            {
                "key": "timeline",
                "templates": ["For how many months would you like us to manage your accounts?"],
                "suggestions": ["3 months", "6 months", "12 months", "Ongoing"],
            },
        ],
    },
    "AI Automation": {
        "aliases": ["ai", "automation", "ai automation", "ai-automation", "workflow automation"],
        "opening_message": "Hi! Let's automate your workflows with AI. Tell me what you want to automate.",
        "details": (
            "Sub-types: AI Chatbots, Workflow Automation, Lead Scoring\n"
            "Pricing: Basic ₹30,000-₹80,000 | Advanced ₹1,50,000-₹5,00,000\n"
            "Timelines: Full automation system 3-6 weeks | Single workflow 7-10 days"
        ),
        "questions": [
            {
                "id": "Q1",
                "next_id": "Q2",
                "key": "automation_process",
                "patterns": ["process", "automate", "workflow"],
                "templates": ["What process do you want to automate?"],
                "tags": ["service_type"],
            },
            {
                "id": "Q2",
                "next_id": "Q3",
                "key": "brief",
                "patterns": ["brief", "summary", "overview", "requirements"],
                "templates": ["Please share a short brief of what you need (2-3 lines)."],
            },
            {
                "id": "Q3",
                "next_id": "Q4",
                "key": "integrations",
                "patterns": ["tools", "platforms", "integrations"],
                "templates": ["Which tools or platforms should integrate?"],
                "required": False,
            },
            {
                "id": "Q4",
                "next_id": "Q5",
                "key": "automation_type",
                "patterns": ["one-time", "ongoing", "workflows"],
                "templates": ["Is this one-time automation or ongoing workflows?"],
                "suggestions": ["One-time automation", "Ongoing workflows"],
            },
            {
                "id": "Q5",
                "next_id": "Q6",
                "key": "complexity",
                "patterns": ["complexity", "basic", "advanced"],
                "templates": ["What is the complexity level?"],
                "suggestions": ["Basic", "Advanced"],
            },
            {
                "id": "Q6",
                "next_id": "Q7",
                "key": "timeline",
                "patterns": ["timeline", "deadline"],
                "templates": ["What is your timeline?"],
            },
            {
                "id": "Q7",
                "key": "budget",
                "patterns": ["budget", "range", "cost"],
                "templates": ["What is your budget range?"],
            },
        ],
    },
    "Creative & Design": {
        "aliases": ["design", "creative", "branding", "logo", "logo design", "creative-and-design"],
        "opening_message": "Hey! Let's create something beautiful together. Tell me about your design needs!",
        "details": (
            "Sub-types: Logo Design, Branding Kit, UI/UX Design, Marketing Creatives\n"
            "Pricing: Logo ₹8,000-₹30,000 | Branding kit ₹40,000-₹1,50,000 | UI/UX ₹1,500-₹3,000/screen\n"
            "Timelines: Full branding project 3-5 weeks | Logo only 7-10 days"
        ),
        "questions": [
            {"key": "name", "patterns": ["name", "call you"], "templates": ["What's your name?"]},
            {
                "key": "company",
                "patterns": ["company", "brand", "business"],
                "templates": ["Nice to meet you, {name}! What's your company or brand called?"],
                "required": False,
            },
            {
                "key": "design_type",
                "patterns": ["type", "looking for"],
                "templates": ["What kind of design work do you need?"],
                "suggestions": ["Logo", "Branding", "Social Media Graphics", "UI/UX", "Print Design", "Other"],
                "tags": ["service_type"],
            },
            {
                "key": "style",
                "patterns": ["style", "look", "vibe", "aesthetic"],
                "templates": ["What style or vibe are you going for?"],
                "suggestions": ["Modern/Minimal", "Bold/Colorful", "Elegant/Luxury", "Playful/Fun", "Not sure yet"],
            },
            {
                "key": "deliverables",
                "patterns": ["deliver", "files", "formats"],
                "templates": ["What deliverables do you need? (Select all that apply)"],
                "suggestions": ["Logo files", "Social templates", "Brand guidelines", "Print-ready files", "All of it"],
                "multi_select": True,
            },
            {
                "key": "budget",
                "patterns": ["budget", "cost", "spend"],
                "templates": ["What's your budget for this project?"],
                "suggestions": ["Under ₹10,000", "₹10,000 - ₹25,000", "₹25,000 - ₹50,000", "₹50,000+"],
            },
            {
                "key": "timeline",
                "patterns": ["timeline", "when", "deadline"],
                "templates": ["When do you need this done?"],
                "suggestions": ["This week", "1-2 weeks", "1 month", "Flexible"],
            },
        ],
    },
    "Customer Support": {
        "aliases": ["support", "customer support", "helpdesk", "customer-support"],
        "opening_message": "Hi! Let's set up great customer support. Tell me about your needs!",
        "details": (
            "Sub-types: Email Support, Chat Support, Voice Support\n"
            "Pricing: Email/Chat ₹25,000-₹60,000 per agent | Voice ₹40,000-₹80,000 per agent\n"
            "Timelines: Monthly engagement"
        ),
        "questions": [
            {"key": "name", "patterns": ["name", "call you"], "templates": ["What's your name?"]},
            {
                "key": "company",
                "patterns": ["company", "business", "brand"],
                "templates": ["Nice to meet you, {name}! What's your company called?"],
                "required": False,
            },
            {
                "key": "support_type",
                "patterns": ["type", "kind", "support"],
                "templates": ["What type of support do you need?"],
                "suggestions": ["Live chat", "Email support", "Phone support", "All channels", "Helpdesk setup"],
                "tags": ["service_type"],
            },
            {
                "key": "volume",
                "patterns": ["volume", "tickets", "requests"],
                "templates": ["How many support tickets do you handle per day?"],
                "suggestions": ["Under 50", "50-200", "200-500", "500+"],
            },
            {
                "key": "hours",
                "patterns": ["hours", "availability", "24/7"],
                "templates": ["What hours of coverage do you need?"],
                "suggestions": ["Business hours", "Extended hours", "24/7", "Flexible"],
            },
            {
                "key": "budget",
                "patterns": ["budget", "cost", "spend"],
                "templates": ["What's your monthly budget for support?"],
                "suggestions": [
                    "Under ₹30,000/mo",
                    "₹30,000 - ₹60,000/mo",
                    "₹60,000 - ₹1,00,000/mo",
                    "₹1,00,000+/mo",
                ],
            },
            {
                "key": "timeline",
                "patterns": ["timeline", "when", "start"],
                "templates": ["When do you want to start?"],
                "suggestions": ["Immediately", "This week", "Next month", "Flexible"],
            },
        ],
    },
    "Influencer/UGC Marketing": {
        "aliases": ["influencer", "ugc", "influencer marketing", "influencer-ugc-marketing"],
        "opening_message": "Hi! Let's plan an influencer/UGC campaign that fits your brand and budget. What's your name?",
        "details": (
            "Sub-types: Micro Influencers, Macro Influencers, UGC Creators\n"
            "Pricing: Micro influencers ₹5,000-₹25,000 | UGC videos ₹3,000-₹15,000/video\n"
            "Timelines: Full campaign 2-4 weeks | Influencer sourcing only 7-10 days"
        ),
        "questions": [
            {"key": "name", "patterns": ["name", "call you"], "templates": ["What's your name?"]},
            {
                "key": "company",
                "patterns": ["company", "brand", "business"],
                "templates": ["Nice to meet you, {name}! What's your brand name?"],
                "required": False,
            },
            {
                "key": "goal",
                "patterns": ["goal", "objective", "purpose"],
                "templates": ["What's the main goal of this campaign?"],
                "suggestions": ["Brand awareness", "Sales", "App installs", "Lead generation", "Not sure yet"],
            },
            {
                "key": "platforms",
                "patterns": ["platform", "channel", "instagram", "youtube"],
                "templates": ["Which platforms should we focus on? (Select all that apply)"],
                "suggestions": ["Instagram", "YouTube", "Facebook", "LinkedIn", "Other"],
                "multi_select": True,
            },
            {
                "key": "creator_type",
                "patterns": ["micro", "macro", "ugc", "creator", "influencer"],
                "templates": ["What kind of creators do you want?"],
                "suggestions": ["Micro Influencers", "Macro Influencers", "UGC Creators", "Not sure yet"],
                "tags": ["service_type"],
            },
            {
                "key": "deliverables",
                "patterns": ["deliverables", "content", "reels", "posts", "videos"],
                "templates": ["What content deliverables do you need? (Select all that apply)"],
                "suggestions": ["Reels/Shorts", "Posts", "Stories", "UGC Videos", "Other"],
                "multi_select": True,
            },
            {
                "key": "budget",
                "patterns": ["budget", "cost", "price", "spend"],
                "templates": ["What's your budget range for this campaign?"],
                "suggestions": ["₹5,000-₹25,000", "₹25,000-₹60,000", "₹60,000+", "Not sure yet"],
            },
            {
                "key": "timeline",
                "patterns": ["timeline", "when", "start", "deadline"],
                "templates": ["When do you want to start?"],
                "suggestions": ["This week", "1-2 weeks", "2-4 weeks", "Flexible"],
            },
        ],
    },
    "Lead Generation": {
        "aliases": ["leads", "lead gen", "lead generation", "lead-generation"],
        "opening_message": "Hello! Looking to grow your leads? I'll help you put together the right campaign.",
        "details": (
            "Sub-types: B2B Lead Generation, B2C Lead Generation, Real Estate Leads, Appointment Booking\n"
            "Pricing: Setup ₹15,000-₹30,000 | Monthly ₹20,000-₹60,000\n"
            "Timelines: Ongoing, minimum 30 days | Ad setup only 5-7 days"
        ),
        "questions": [
            {
                "key": "name",
                "patterns": ["name", "call you"],
                "templates": ["What's your name?", "Hi! Let's get you more customers. What should I call you?"],
            },
            {
                "key": "business",
                "patterns": ["business", "offer", "sell"],
                "templates": ["Great, {name}! Tell me about your business. What do you offer?"],
                "tags": ["offering"],
                "required": True,
            },
            {
                "key": "target",
                "patterns": ["target", "audience", "ideal customer"],
                "templates": ["Who's your ideal customer?"],
                "tags": ["audience"],
            },
            {
                "key": "volume",
                "patterns": ["volume", "how many", "leads per month"],
                "templates": ["How many leads per month are you looking for?"],
                "suggestions": ["Under 100", "100-500", "500-1000", "1000+"],
            },
            {
                "key": "channels",
                "patterns": ["channel", "method", "source"],
                "templates": ["Which channels work best for reaching your audience?"],
                "suggestions": ["Email", "LinkedIn", "Cold Calling", "Ads", "Mix of all"],
            },
            {
                "key": "budget",
                "patterns": ["budget", "cost", "spend"],
                "templates": ["What's your budget for lead generation?"],
                "suggestions": ["Under ₹25,000", "₹25,000 - ₹50,000", "₹50,000 - ₹1,00,000", "₹1,00,000+"],
            },
            {
                "key": "timeline",
                "patterns": ["timeline", "when", "start"],
                "templates": ["When do you want to start the campaign?"],
                "suggestions": ["Immediately", "This week", "Next month", "Flexible"],
            },
        ],
    },
    "SEO Optimization": {
        "aliases": ["seo", "search engine optimization", "seo-optimization"],
        "opening_message": "Hi! Ready to rank higher on Google? Let's boost your visibility!",
        "details": (
            "Sub-types: On-page SEO, Off-page SEO, Technical SEO, Local SEO (GMB)\n"
            "Pricing: Starter ₹15,000/month | Growth ₹25,000-₹60,000/month\n"
            "Timelines: Results typically start in 60-90 days | Audit only 7-10 days"
        ),
        "questions": [
            {"key": "name", "patterns": ["name", "call you"], "templates": ["What's your name?"]},
            {
                "key": "website",
                "patterns": ["website", "url", "site"],
                "templates": ["Nice to meet you, {name}! What's your website URL?"],
                "tags": ["website_url"],
                "required": False,
            },
            {
                "key": "goals",
                "patterns": ["goal", "achieve"],
                "templates": ["What's your main goal with SEO?"],
                "suggestions": ["Rank higher", "More traffic", "More leads", "Brand visibility"],
            },
            {
                "key": "keywords",
                "patterns": ["keyword", "search term", "rank for"],
                "templates": ["Any specific keywords you want to rank for?"],
                "required": False,
            },
            {
                "key": "competitors",
                "patterns": ["competitor", "competition"],
                "templates": ["Who are your main competitors?"],
                "required": False,
            },
            {
                "key": "budget",
                "patterns": ["budget", "cost", "spend"],
                "templates": ["What's your monthly budget for SEO?"],
                "suggestions": ["Under ₹10,000/mo", "₹10,000 - ₹25,000/mo", "₹25,000 - ₹50,000/mo", "₹50,000+/mo"],
            },
            {
                "key": "timeline",
                "patterns": ["timeline", "when", "start"],
                "templates": ["When would you like to start?"],
                "suggestions": ["Immediately", "This week", "Next month", "Flexible"],
            },
        ],
    },
    "Video Services": {
        "aliases": ["video", "video editing", "video production", "video-services"],
        "opening_message": "Hey! I'm here to help you create an amazing video. Let's figure out exactly what you need!",
        "details": (
            "Sub-types: Reels/Shorts, Explainer Videos, Ad Films, Corporate Videos\n"
            "Pricing: Reels ₹1,500-₹5,000/video | Explainer ₹10,000-₹40,000 | Ad video ₹5,000-₹25,000\n"
            "Timelines: Full video project 7-14 days | Editing only 3-5 days"
        ),
        "questions": [
            {
                "key": "name",
                "patterns": ["name", "call you"],
                "templates": ["What's your name?", "Hi there! Let's make some great video content. What should I call you?"],
            },
            {
                "key": "video_type",
                "patterns": ["type", "kind", "what video"],
                "templates": ["Nice to meet you, {name}! What type of video are you looking for?"],
                "suggestions": ["3D model", "3D video", "Normal video", "Other"],
            },
            {
                "key": "goal",
                "patterns": ["goal", "purpose", "objective"],
                "templates": ["What's the main goal for this {video_type}?"],
                "suggestions": ["Brand Awareness", "Lead Generation", "Engagement", "Product Launch"],
            },
            {
                "key": "footage",
                "patterns": ["footage", "raw", "production", "shoot"],
                "templates": ["Do you already have assets or footage, or do you need full production?"],
                "suggestions": ["I have footage", "Need full production", "Not sure yet"],
            },
            {
                "key": "duration",
                "patterns": ["duration", "length", "how long", "seconds", "minutes"],
                "templates": ["How long should the final video be?"],
                "suggestions": ["Under 30 seconds", "30-60 seconds", "1-3 minutes", "3+ minutes"],
            },
            {
                "key": "style",
                "patterns": ["style", "mood", "tone", "vibe"],
                "templates": ["What style or mood are you going for?"],
                "suggestions": ["Professional", "Fun/Energetic", "Emotional", "Cinematic", "Educational"],
            },
            {
                "key": "platforms",
                "patterns": ["platform", "publish", "channel", "social"],
                "templates": ["Where will this video be shared?"],
                "suggestions": ["Website", "YouTube", "Instagram", "LinkedIn", "TikTok", "Multiple"],
            },
            {
                "key": "budget",
                "patterns": ["budget", "cost", "price", "spend"],
                "templates": ["What's your budget for this project?"],
                "suggestions": ["Under ₹25,000", "₹25,000 - ₹60,000", "₹60,000 - ₹1,25,000", "₹1,25,000+"],
            },
            {
                "key": "timeline",
                "patterns": ["timeline", "deadline", "when", "delivery"],
                "templates": ["When do you need the final deliverable?"],
                "suggestions": ["Within 1 week", "2-4 weeks", "1-2 months", "Flexible"],
            },
            {
                "key": "notes",
                "patterns": ["notes", "special", "reference"],
                "templates": ["Any special requests or reference videos you'd like to share? (Type 'skip' to move on)"],
                "required": False,
            },
        ],
    },
    "Writing & Content": {
        "aliases": ["writing", "content", "copywriting", "content writing", "writing-and-content"],
        "opening_message": "Hey! Ready to create great content? Let's talk about what you need!",
        "details": (
            "Sub-types: Website Content, Blogs & Articles, Ad Copy, Scripts\n"
            "Pricing: Blogs ₹1-₹5/word | Website content ₹10,000-₹50,000\n"
            "Timelines: Full content package 2-4 weeks | Single blog 3-5 days"
        ),
        "questions": [
            {"key": "name", "patterns": ["name", "call you"], "templates": ["What's your name?"]},
            {
                "key": "company",
                "patterns": ["company", "brand", "business"],
                "templates": ["Nice, {name}! What's your company or brand called?"],
                "required": False,
            },
            {
                "key": "content_type",
                "patterns": ["type", "kind", "content"],
                "templates": ["What type of content do you need?"],
                "suggestions": ["Blog posts", "Website copy", "Social media", "Email campaigns", "Scripts", "Other"],
            },
            {
                "key": "tone",
                "patterns": ["tone", "style", "voice"],
                "templates": ["What tone should the content have?"],
                "suggestions": ["Professional", "Friendly", "Persuasive", "Educational", "Fun/Casual"],
            },
            {
                "key": "volume",
                "patterns": ["volume", "how much", "pieces"],
                "templates": ["How much content do you need?"],
                "suggestions": ["1-5 pieces", "5-10 pieces", "10-20 pieces", "Ongoing monthly"],
            },
            {
                "key": "budget",
                "patterns": ["budget", "cost", "spend"],
                "templates": ["What's your budget for this?"],
                "suggestions": ["Under ₹5,000", "₹5,000 - ₹15,000", "₹15,000 - ₹30,000", "₹30,000+"],
            },
            {
                "key": "timeline",
                "patterns": ["timeline", "when", "deadline"],
                "templates": ["When do you need the content?"],
                "suggestions": ["ASAP", "This week", "2 weeks", "Flexible"],
            },
        ],
    },
    DEFAULT_SERVICE: {
        "aliases": ["default", "general", "other"],
        "opening_message": "Hi! Tell me a bit about what you need and I'll put together a proposal.",
        "questions": [
            {"key": "name", "templates": ["What's your name?"]},
            {
                "key": "service_type",
                "templates": ["Nice to meet you, {name}! What kind of service are you looking for?"],
            },
            {
                "key": "audience",
                "templates": ["Who is your target audience?"],
                "required": False,
            },
            {"key": "budget", "templates": ["What's your budget for this?"]},
            {"key": "timeline", "templates": ["When do you need it done?"]},
        ],
    },
}
