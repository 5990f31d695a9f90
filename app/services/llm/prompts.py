SUMMARY_PROMPT_TEMPLATE = """You are an AI assistant specializing in summarizing group conversations. Below is a WhatsApp group chat export. Your task is to generate a detailed, insightful summary of the conversations {date_range}.

### Key Objectives:
1. Identify the **main topics** discussed each day and provide a **clear summary** of each.
2. Highlight key contributions by mentioning **who said what** for important points.
3. Extract and list **notable quotes or key messages** that add significant value to the discussion.
4. **Organize the output clearly** with headings, subheadings, and bullet points.

### Special Instructions:
- Ignore trivial messages, such as greetings, media notifications, and unrelated chatter.
- Prioritize content that reflects meaningful discussions, ideas, or decisions.
- For controversial or multi-participant discussions, summarize all viewpoints succinctly.
- Make the summary concise but ensure it covers all significant details.

### Chat Data:
{processed_chat}

### Output Format:
#### Summary of Conversations ({date_range})
**Date: [Insert Date]**
1. **Main Topics Discussed:**
   - **Topic 1: [Brief Topic Name]**
     - [Username]: "[Key message or insight]"
     - [Username]: "[Another key message or insight]"
     - Summary: [Briefly summarize the discussion]

   - **Topic 2: [Brief Topic Name]**
     - [Username]: "[Key message or insight]"
     - Summary: [Briefly summarize the discussion]

2. **Key Highlights:**
   - "[Important quote or insight]" - [Username]
   - "[Another important quote or insight]" - [Username]

3. **Notable Messages:**
   - [Username]: "[Important message]"
   - [Username]: "[Another important message]"

4. **Actionable Outcomes (if any):**
   - [Action item 1]
   - [Action item 2]

This format ensures the output is organized, actionable, and easy to understand. For each conversation, focus on clarity, coherence, and relevance."""


def build_summary_prompt(processed_chat: str, date_range: str) -> str:
    return SUMMARY_PROMPT_TEMPLATE.format(processed_chat=processed_chat, date_range=date_range)
