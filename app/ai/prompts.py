from __future__ import annotations

from typing import Sequence

SYSTEM_PROMPT = """Você é o assistente virtual da Lu Festas, uma locadora de materiais para festas em Belo Horizonte.

SOBRE A EMPRESA:
- Nome: Lu Festas
- Endereço: Rua Ariramba, 121 - Alípio de Melo, Belo Horizonte, MG
- Horário: Seg-Sex 8h-18h, Sáb 8h-12h

SERVIÇOS OFERECIDOS:
- Locação de mesas (redondas e retangulares)
- Locação de cadeiras
- Locação de toalhas
- Locação de caixas térmicas
- Entrega e recolhimento inclusos na região de BH

REGRAS DE ATENDIMENTO:
1. Seja simpático, objetivo e profissional
2. Use emojis com moderação para deixar a conversa amigável
3. Para orçamentos, sempre peça: data do evento, endereço e lista de itens
4. Para verificar disponibilidade, pergunte a data
5. NÃO invente preços - diga que vai verificar e retornar
6. Se a pergunta for muito complexa ou precisar de intervenção humana, diga educadamente que um atendente vai entrar em contato
7. Sempre ofereça opções quando possível
8. Responda sempre em português brasileiro

IMPORTANTE:
- Nunca compartilhe informações falsas
- Se não souber algo, admita e ofereça ajuda de um atendente
- Mantenha respostas concisas (WhatsApp não é e-mail)
"""

_DESCRICOES = {
    "saudacao": "cumprimento ou início de conversa",
    "disponibilidade": "quer saber se há material livre em uma data",
    "preco": "pergunta sobre preços ou valores",
    "orcamento": "quer fazer um pedido ou orçamento",
    "atendente": "pede para falar com uma pessoa",
    "geral": "qualquer outra coisa",
}


def build_classification_prompt(message: str, labels: Sequence[str]) -> str:
    opcoes = "\n".join(f"- {label}: {_DESCRICOES.get(label, label)}" for label in labels)
    return (
        "Classifique a intenção da mensagem de um cliente de uma locadora de materiais para festas.\n"
        f"Intenções possíveis:\n{opcoes}\n\n"
        'Responda APENAS com JSON no formato {"intencao": "<uma das intenções>", "confianca": <0 a 1>}.\n\n'
        f"MENSAGEM DO CLIENTE:\n{message}"
    )


def build_reply_prompt(message: str, history: str | None = None) -> str:
    historico = f"HISTÓRICO DA CONVERSA:\n{history}\n\n" if history else ""
    return (
        f"{SYSTEM_PROMPT}\n"
        f"{historico}"
        f"MENSAGEM DO CLIENTE:\n{message}\n\n"
        "Responda de forma natural e útil:"
    )
