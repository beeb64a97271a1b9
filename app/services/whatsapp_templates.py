from __future__ import annotations

from app.fsm.states import Intent

# Texto visto pelo cliente no WhatsApp: alterar aqui altera o bot inteiro.
RESPOSTAS: dict[Intent, str] = {
    Intent.SAUDACAO: (
        "Olá! 👋 Bem-vindo(a) à *Lu Festas*!\n"
        "\n"
        "Como posso ajudar?\n"
        "\n"
        "1️⃣ Ver disponibilidade\n"
        "2️⃣ Lista de preços\n"
        "3️⃣ Fazer orçamento\n"
        "4️⃣ Falar com atendente\n"
        "\n"
        "_Digite o número da opção desejada_"
    ),
    Intent.DISPONIBILIDADE: (
        "📅 *Consulta de Disponibilidade*\n"
        "\n"
        "Para qual data você precisa dos materiais?\n"
        "\n"
        "_Responda no formato: DD/MM/AAAA_\n"
        "_Exemplo: 25/12/2024_"
    ),
    Intent.PRECO: (
        "💰 *Tabela de Preços - Lu Festas*\n"
        "\n"
        "🪑 *Cadeiras*\n"
        "• Cadeira plástica: R$ 3,00/un\n"
        "\n"
        "🍽️ *Mesas*\n"
        "• Mesa redonda 1,20m: R$ 15,00/un\n"
        "• Mesa retangular: R$ 12,00/un\n"
        "\n"
        "🎨 *Toalhas*\n"
        "• Toalha redonda: R$ 8,00/un\n"
        "• Toalha retangular: R$ 6,00/un\n"
        "\n"
        "🧊 *Caixa Térmica*\n"
        "• 26L: R$ 20,00/un\n"
        "• 45L: R$ 30,00/un\n"
        "\n"
        "📦 *Frete*: A combinar (depende da região)\n"
        "\n"
        "_Digite *orçamento* para fazer um pedido!_"
    ),
    Intent.ORCAMENTO: (
        "📝 *Vamos fazer seu orçamento!*\n"
        "\n"
        "Por favor, me informe:\n"
        "\n"
        "1. Data do evento (DD/MM/AAAA)\n"
        "2. Endereço completo\n"
        "3. Lista de itens e quantidades\n"
        "\n"
        "_Exemplo:_\n"
        "_20/12/2024_\n"
        "_Rua das Flores, 123 - Bairro_\n"
        "_30 cadeiras, 3 mesas redondas_"
    ),
    Intent.ATENDENTE: (
        "👤 *Encaminhando para atendimento humano*\n"
        "\n"
        "Um de nossos atendentes entrará em contato em breve!\n"
        "\n"
        "⏰ Horário de atendimento:\n"
        "• Seg a Sex: 8h às 18h\n"
        "• Sábado: 8h às 12h\n"
        "\n"
        "_Aguarde, por favor!_ 🙏"
    ),
    # Usado só quando o próprio bot falha; a intenção "geral" é respondida pela IA.
    Intent.GERAL: (
        "Desculpe, não entendi sua mensagem. 😅\n"
        "\n"
        "Digite *menu* para ver as opções disponíveis."
    ),
}

DATA_FORMATO_INVALIDO = "Por favor, informe a data no formato DD/MM/AAAA (ex: 25/12/2024)"

ERRO_DISPONIBILIDADE = "Erro ao consultar disponibilidade. Tente novamente ou digite *menu*."

SEM_PRODUTOS = (
    "📅 Nenhum produto cadastrado no sistema.\n"
    "\n"
    "Entre em contato com um atendente para mais informações."
)

CHAMADA_ORCAMENTO = "_Digite *orçamento* para fazer um pedido!_"

IA_SEM_RESPOSTA = "Desculpe, não consegui processar sua mensagem. Um atendente entrará em contato."

IA_INDISPONIVEL = "Desculpe, estou com dificuldades técnicas. Um atendente entrará em contato em breve. 🙏"


def resposta_para(intent: Intent) -> str:
    return RESPOSTAS[intent]
